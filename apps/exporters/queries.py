"""
apps.exporters.queries
~~~~~~~~~~~~~~~~~~~~~~
GraphQL documents for the ``exporter`` table.  Exporters reach their
credential through the ``credential`` relation on ``credential_id``.
"""
from common.graphql_client import gql

GET_EXPORTERS = gql(
    """
    query GetExporters($tenant_id: uuid!) {
      exporter(where: {tenant_id: {_eq: $tenant_id}}, order_by: {name: asc}) {
        id
        name
        type
        config
        created_at
        updated_at
        credential {
          name
        }
      }
    }
    """
)

GET_EXPORTER_ID_BY_NAME = gql(
    """
    query GetExporterIdByName($tenant_id: uuid!, $name: String!) {
      exporter(where: {tenant_id: {_eq: $tenant_id}, name: {_eq: $name}}) {
        id
      }
    }
    """
)

GET_EXPORTER = gql(
    """
    query GetExporter($tenant_id: uuid!, $id: uuid!) {
      exporter(where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}) {
        id
        name
        type
        config
        created_at
        updated_at
        credential {
          name
        }
      }
    }
    """
)

DELETE_EXPORTER = gql(
    """
    mutation DeleteExporter($tenant_id: uuid!, $id: uuid!) {
      delete_exporter(where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}) {
        returning {
          id
        }
      }
    }
    """
)

CREATE_EXPORTERS = gql(
    """
    mutation CreateExporters($exporters: [exporter_insert_input!]!) {
      insert_exporter(objects: $exporters) {
        returning {
          id
        }
      }
    }
    """
)

UPDATE_EXPORTER = gql(
    """
    mutation UpdateExporter(
      $tenant_id: uuid!
      $id: uuid!
      $credential_id: uuid
      $config: json!
      $updated_at: timestamptz!
    ) {
      update_exporter(
        where: {tenant_id: {_eq: $tenant_id}, id: {_eq: $id}}
        _set: {credential_id: $credential_id, config: $config, updated_at: $updated_at}
      ) {
        returning {
          id
        }
      }
    }
    """
)
