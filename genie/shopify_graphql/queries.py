# genie/shopify_graphql/queries.py

GET_PRODUCTS_QUERY = """
query getProducts($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        title
        vendor
        status
        featuredImage {
          url
        }
        variants(first: 10) {
          edges {
            node {
              id
              price
              inventoryQuantity
              inventoryPolicy
            }
          }
        }
        totalInventory
      }
    }
  }
}
"""
