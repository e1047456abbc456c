# genie/shopify_graphql/customer_account.py

CUSTOMER_QUERY = """
query {
  customer {
    id
    emailAddress {
      emailAddress
    }
    firstName
    lastName
  }
}
"""

CUSTOMER_ORDERS_QUERY = """
query getOrders($first: Int!) {
  customer {
    orders(first: $first, sortKey: PROCESSED_AT, reverse: true) {
      edges {
        node {
          id
          number
          name
          processedAt
          fulfillmentStatus
          financialStatus
          totalPrice {
            amount
            currencyCode
          }
        }
      }
    }
  }
}
"""
