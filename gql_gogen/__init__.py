"""gql-gogen: Go type declarations from GraphQL server schemas."""

__version__ = "0.1.0"
