"""Database fixtures for LumenQL tests (shared)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.models import Post, Role, Team, User


async def create_sample_data(session: AsyncSession):
    """Create and commit the records used across the relation tests.

    Alice (team Core) holds five roles, one of them inactive, and three posts,
    two of them published. Bob (team Core) holds one role and one post. Carol
    has no team, roles or posts.
    """
    core = Team(name="Core")
    session.add(core)
    await session.flush()

    roles = [
        Role(name="admin", active=True),
        Role(name="editor", active=True),
        Role(name="viewer", active=True),
        Role(name="legacy", active=False),
        Role(name="auditor", active=True),
    ]
    session.add_all(roles)
    await session.flush()

    alice = User(name="Alice", email="alice@example.com", team_id=core.id)
    bob = User(name="Bob", email="bob@example.com", team_id=core.id)
    carol = User(name="Carol", email="carol@example.com")
    alice.roles = list(roles)
    bob.roles = [roles[2]]
    session.add_all([alice, bob, carol])
    await session.flush()

    posts = [
        Post(title="Hello", published=True, author_id=alice.id),
        Post(title="Draft", published=False, author_id=alice.id),
        Post(title="Release notes", published=True, author_id=alice.id),
        Post(title="Bob writes", published=True, author_id=bob.id),
    ]
    session.add_all(posts)
    await session.commit()
    return {
        'teams': [core],
        'roles': roles,
        'users': [alice, bob, carol],
        'posts': posts,
    }


@pytest.fixture(scope="function")
async def populated_db(db_session: AsyncSession):
    return await create_sample_data(db_session)


@pytest.fixture(scope="function")
async def user_with_team(db_session: AsyncSession):
    """One user and the team it belongs to."""
    team = Team(name="Core")
    db_session.add(team)
    await db_session.flush()
    user = User(name="Alice", email="alice@example.com", team_id=team.id)
    db_session.add(user)
    await db_session.commit()
    return {'user': user, 'team': team}
