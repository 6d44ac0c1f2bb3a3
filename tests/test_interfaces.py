"""Interface and union resolution through the type registry or an explicit resolver."""

import pytest

from lumenql import SchemaBuilder
from lumenql.errors import UnresolvableAbstractTypeMapping
from tests.models import Base
from tests.resolvers import always_team


NAMED_THINGS_QUERY = '''
{
  namedThings {
    __typename
    name
  }
}
'''


@pytest.fixture
def builder():
    return SchemaBuilder(Base)


async def test_interface_resolves_through_bound_models(builder):
    schema = builder.build('''
interface Named { name: String! }
type User implements Named { id: ID! name: String! email: String! }
type Team implements Named { id: ID! name: String! }
type Query { namedThings: [Named!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute(NAMED_THINGS_QUERY)
    assert result.errors is None
    assert result.data == {'namedThings': [
        {'__typename': 'User', 'name': 'Alice'},
        {'__typename': 'Team', 'name': 'Core'},
    ]}


async def test_renamed_model_types(builder):
    schema = builder.build('''
interface Named { name: String! }
type Guy implements Named @model(class: "User") { id: ID! name: String! }
type Crew implements Named @model(class: "tests.models.Team") { id: ID! name: String! }
type Query { namedThings: [Named!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute(NAMED_THINGS_QUERY)
    assert result.errors is None
    assert [item['__typename'] for item in result.data['namedThings']] == ['Guy', 'Crew']


async def test_ambiguous_candidates_fail_the_field(builder):
    schema = builder.build('''
interface Named { name: String! }
type User implements Named { id: ID! name: String! }
type Team implements Named { id: ID! name: String! }
type Foo implements Named @model(class: "Team") { id: ID! name: String! }
type Query { namedThings: [Named!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute(NAMED_THINGS_QUERY)
    assert result.data is None
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.path == ['namedThings', 1]
    assert isinstance(error.original_error, UnresolvableAbstractTypeMapping)
    assert sorted(error.original_error.candidates) == ['Foo', 'Team']


async def test_model_without_possible_type_fails(builder):
    schema = builder.build('''
interface Named { name: String! }
type User implements Named { id: ID! name: String! }
type Query { namedThings: [Named!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute(NAMED_THINGS_QUERY)
    assert len(result.errors) == 1
    assert isinstance(result.errors[0].original_error, UnresolvableAbstractTypeMapping)
    assert result.errors[0].original_error.candidates == []


async def test_custom_resolve_type(builder):
    schema = builder.build('''
interface Named @interface(resolveType: "tests.resolvers:resolve_guy") { name: String! }
type Guy implements Named @model(class: "User") { id: ID! name: String! }
type Team implements Named { id: ID! name: String! }
type Query { guys: [Named!]! @field(resolver: "tests.resolvers:fetch_users") }
''')
    result = await schema.execute('{ guys { __typename name } }')
    assert result.errors is None
    assert result.data == {'guys': [{'__typename': 'Guy', 'name': 'Alice'}]}


async def test_async_resolve_type_returning_type_object(builder):
    schema = builder.build('''
interface Named @interface(resolveType: "tests.resolvers:fetch_guy") { name: String! }
type Guy implements Named @model(class: "User") { id: ID! name: String! }
type Query { guys: [Named!]! @field(resolver: "tests.resolvers:fetch_users") }
''')
    result = await schema.execute('{ guys { __typename } }')
    assert result.errors is None
    assert result.data == {'guys': [{'__typename': 'Guy'}]}


async def test_explicit_resolver_takes_precedence_over_registry():
    builder = SchemaBuilder(Base, resolvers={'always_team': always_team})
    schema = builder.build('''
interface Named @interface(resolveType: "always_team") { name: String! }
type User implements Named { id: ID! name: String! }
type Team implements Named { id: ID! name: String! }
type Query { users: [Named!]! @field(resolver: "tests.resolvers:fetch_users") }
''')
    result = await schema.execute('{ users { __typename name } }')
    assert result.errors is None
    assert result.data == {'users': [{'__typename': 'Team', 'name': 'Alice'}]}


async def test_union_resolves_through_registry(builder):
    schema = builder.build('''
union Anything = User | Team
type User { id: ID! name: String! email: String! }
type Team { id: ID! name: String! }
type Query { things: [Anything!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute('''
{
  things {
    __typename
    ... on User { email }
    ... on Team { name }
  }
}
''')
    assert result.errors is None
    assert result.data == {'things': [
        {'__typename': 'User', 'email': 'alice@example.com'},
        {'__typename': 'Team', 'name': 'Core'},
    ]}


async def test_union_with_explicit_resolver(builder):
    schema = builder.build('''
union Anything @union(resolveType: "tests.resolvers:always_team") = User | Team
type User { id: ID! name: String! }
type Team { id: ID! name: String! }
type Query { things: [Anything!]! @field(resolver: "tests.resolvers:fetch_teams") }
''')
    result = await schema.execute('{ things { __typename } }')
    assert result.errors is None
    assert result.data == {'things': [{'__typename': 'Team'}]}


async def test_possible_types(builder):
    schema = builder.build('''
interface Named { name: String! }
type User implements Named { id: ID! name: String! }
type Team implements Named { id: ID! name: String! }
type Query { namedThings: [Named!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute('{ __type(name: "Named") { possibleTypes { name } } }')
    assert result.errors is None
    assert len(result.data['__type']['possibleTypes']) == 2
    assert sorted(schema.registry.possible_types('Named')) == ['Team', 'User']


async def test_paginated_interface_field_reports_wrapper_type(builder):
    schema = builder.build('''
interface HasPosts { posts: [Post!]! @hasMany(type: PAGINATOR) }
type User implements HasPosts { id: ID! posts: [Post!]! @hasMany(type: PAGINATOR) }
type Post { id: ID! }
type Query { users: [User!]! @field(resolver: "tests.resolvers:fetch_users") }
''')
    result = await schema.execute('''
{
  __type(name: "HasPosts") {
    fields {
      name
      type { name kind }
    }
  }
}
''')
    assert result.errors is None
    assert result.data['__type']['fields'] == [
        {'name': 'posts', 'type': {'name': 'PostPaginator', 'kind': 'OBJECT'}},
    ]


async def test_inline_fragment_applies_only_to_matching_type(builder):
    schema = builder.build('''
interface Nameable { name: String! }
type User implements Nameable { id: ID! name: String! }
type Team implements Nameable { id: ID! name: String! }
type Query { namedThings: [Nameable!]! @field(resolver: "tests.resolvers:fetch_named_things") }
''')
    result = await schema.execute('{ namedThings { name ... on User { id } } }')
    assert result.errors is None
    assert result.data == {'namedThings': [{'name': 'Alice', 'id': '1'}, {'name': 'Core'}]}
