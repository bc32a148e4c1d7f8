"""
apps.credentials.queries
~~~~~~~~~~~~~~~~~~~~~~~~
GraphQL documents for the ``credential`` table.

None of the read queries select ``value``: secrets never leave the store
through this API.
"""
from common.graphql_client import gql

GET_CREDENTIALS = gql(
    """
    query GetCredentials($tenant_id: uuid!) {
      credential(where: {tenant_id: {_eq: $tenant_id}}, order_by: {name: asc}) {
        id
        name
        type
        created_at
        updated_at
      }
    }
    """
)

GET_CREDENTIAL_ID_BY_NAME = gql(
    """
    query GetCredentialIdByName($tenant_id: uuid!, $name: String!) {
      credential(where: {tenant_id: {_eq: $tenant_id}, name: {_eq: $name}}) {
        id
      }
    }
    """
)

GET_CREDENTIAL = gql(
    """
    query GetCredential($tenant_id: uuid!, $id: uuid!) {
      credential(where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}) {
        id
        name
        type
        created_at
        updated_at
      }
    }
    """
)

DELETE_CREDENTIAL = gql(
    """
    mutation DeleteCredential($tenant_id: uuid!, $id: uuid!) {
      delete_credential(where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}) {
        returning {
          id
        }
      }
    }
    """
)

CREATE_CREDENTIALS = gql(
    """
    mutation CreateCredentials($credentials: [credential_insert_input!]!) {
      insert_credential(objects: $credentials) {
        returning {
          id
        }
      }
    }
    """
)

UPDATE_CREDENTIAL = gql(
    """
    mutation UpdateCredential(
      $tenant_id: uuid!
      $id: uuid!
      $value: json!
      $updated_at: timestamptz!
    ) {
      update_credential(
        where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}
        _set: {value: $value, updated_at: $updated_at}
      ) {
        returning {
          id
        }
      }
    }
    """
)
