"""Shared fixtures for text transform tests."""

import pytest

from gql_texttransform.core.composer import SchemaComposer

SDL = '''
interface Node {
  id: ID!
  name: String
}

enum Role {
  ADMIN
  MEMBER
}

type User implements Node {
  id: ID!
  name: String!
  nicknames: [String]!
  friends: [User]
  role: Role
  bio(maxLength: Int): String
}

type Query {
  greeting: String
  count: Int
  tags: [String]!
  matrix: [[String!]]
  user: User
  users: [User!]!
}
'''


@pytest.fixture
def sdl():
    return SDL


@pytest.fixture
def composer():
    """A composer holding the sample schema, without middleware applied."""
    composer = SchemaComposer()
    composer.add_type_defs(SDL)
    return composer


@pytest.fixture
def root_value():
    return {
        "greeting": "hello there",
        "count": 3,
        "tags": ["Red", None, "BLUE"],
        "matrix": [["ab", "Cd"], ["EF"]],
        "user": {
            "id": "1",
            "name": "ada lovelace",
            "nicknames": ["ADA", None, "Countess"],
            "friends": [],
            "role": "ADMIN",
            "bio": "Wrote the first program",
        },
        "users": [],
    }
