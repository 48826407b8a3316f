#!/usr/bin/env python3
"""Demonstration of the text transform middleware.

This script shows how to:
1. Build a schema from SDL and a resolver map
2. Let the middleware add textTransform to every String field
3. Run queries with and without a transform

Resolvers may be sync or async; async results are awaited before the
transform is applied.
"""

import asyncio

from graphql import graphql, print_schema

from gql_texttransform.core import make_executable_schema

TYPE_DEFS = """
type Author {
  name: String!
  aliases: [String]!
  born: Int
}

type Query {
  author(id: ID!): Author
  motto: String
}
"""

AUTHORS = {
    "1": {"name": "mary shelley", "aliases": ["MWS", None, "the author of frankenstein"], "born": 1797},
}


async def resolve_motto(root, info):
    await asyncio.sleep(0)
    return "it's alive"


def resolvers():
    return {
        "Query": {
            "author": lambda root, info, id: AUTHORS.get(id),
            "motto": resolve_motto,
        },
    }


async def main():
    schema = make_executable_schema(TYPE_DEFS, resolvers())

    print("=== Augmented schema ===\n")
    print(print_schema(schema))

    queries = [
        '{ author(id: "1") { name aliases born } motto }',
        '{ author(id: "1") { name(textTransform: TitleCase) aliases(textTransform: UPPERCASE) } }',
        "{ motto(textTransform: UPPERCASE) }",
    ]
    for query in queries:
        result = await graphql(schema, query)
        print(f"\n{query}\n  -> {result.formatted}")


if __name__ == "__main__":
    asyncio.run(main())
