"""
apps.tenants.queries
~~~~~~~~~~~~~~~~~~~~
GraphQL documents for the ``tenant`` table.
"""
from common.graphql_client import gql

GET_TENANT_BY_NAME = gql(
    """
    query GetTenantByName($name: String!) {
      tenant(where: {name: {_eq: $name}}) {
        id
        name
      }
    }
    """
)

GET_TENANT_BY_ID = gql(
    """
    query GetTenantById($id: uuid!) {
      tenant_by_pk(id: $id) {
        id
        name
      }
    }
    """
)
