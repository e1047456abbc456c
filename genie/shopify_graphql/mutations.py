# genie/shopify_graphql/mutations.py

STOREFRONT_ACCESS_TOKEN_CREATE_MUTATION = """
mutation StorefrontAccessTokenCreate($input: StorefrontAccessTokenInput!) {
  storefrontAccessTokenCreate(input: $input) {
    userErrors {
      field
      message
    }
    shop {
      id
    }
    storefrontAccessToken {
      accessScopes {
        handle
      }
      accessToken
      title
    }
  }
}
"""

SCRIPT_TAG_CREATE_MUTATION = """
mutation ScriptTagCreate($input: ScriptTagInput!) {
  scriptTagCreate(input: $input) {
    scriptTag {
      id
      src
      displayScope
    }
    userErrors {
      field
      message
    }
  }
}
"""
