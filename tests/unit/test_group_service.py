"""Tests for GroupService and the ownership lookup."""

import asyncio

import pytest

from grouphub.core.exceptions import NotFoundError
from grouphub.core.rbac import Principal, Role
from grouphub.db.models import Group, Member, Representative, TypeGroup
from grouphub.services import GroupOwnershipLookup, GroupService


def group_data(**overrides):
    data = {
        "entity": "Entidade",
        "organ": "Orgao",
        "council": "Conselho",
        "acronym": "ENT",
        "team": "Equipe",
        "unit": "Unidade",
        "email": "grupo@example.com",
        "status": "EM ANDAMENTO",
        "representative": "rep@example.com",
        "name": "Comissao",
        "type_group": "INTERNO",
    }
    data.update(overrides)
    return data


@pytest.fixture
def manager(user_factory):
    return user_factory(role=Role.MANAGER)


class TestCreate:

    def test_unregistered_representative_is_invited(self, db_session, manager, notifier):
        group = asyncio.run(
            GroupService(db_session, notifier).create(Principal.from_user(manager), group_data())
        )

        assert group.creator_user_id == manager.id
        assert group.representative.email == "rep@example.com"
        assert group.representative.user_id is None
        notifier.send_registration_invite.assert_called_once_with(
            "rep@example.com", Role.REPRESENTATIVE
        )

    def test_registered_representative_is_linked(self, db_session, manager, user_factory, notifier):
        rep = user_factory(role=Role.REPRESENTATIVE, email="rep@example.com")
        group = asyncio.run(
            GroupService(db_session, notifier).create(Principal.from_user(manager), group_data())
        )

        assert group.representative.user_id == rep.id
        notifier.send_registration_invite.assert_not_called()

    def test_type_group_is_reused(self, db_session, manager, notifier):
        service = GroupService(db_session, notifier)
        first = asyncio.run(service.create(Principal.from_user(manager), group_data()))
        second = asyncio.run(
            service.create(Principal.from_user(manager), group_data(representative="r2@example.com"))
        )

        assert first.type_group_id == second.type_group_id
        assert db_session.query(TypeGroup).count() == 1


class TestUpdate:

    def test_update_fields_and_type_group(self, db_session, group_factory, notifier):
        group = group_factory()
        updated = asyncio.run(GroupService(db_session, notifier).update(
            group.id, {"entity": "teste", "type_group": "EXTERNO"}
        ))
        assert updated.entity == "teste"
        assert updated.type_group.type_group == "EXTERNO"
        assert updated.type_group.name == group.type_group.name

    def test_renaming_prunes_unused_type_group(self, db_session, group_factory, notifier):
        group = group_factory()
        previous_id = group.type_group_id

        updated = asyncio.run(GroupService(db_session, notifier).update(group.id, {"name": "Outro"}))

        assert updated.type_group.name == "Outro"
        assert db_session.query(TypeGroup).count() == 1
        assert db_session.get(TypeGroup, previous_id) is None

    def test_renaming_keeps_shared_type_group(self, db_session, group_factory, notifier):
        first = group_factory()
        group_factory(type_group=first.type_group)

        asyncio.run(GroupService(db_session, notifier).update(first.id, {"name": "Outro"}))

        assert db_session.query(TypeGroup).count() == 2

    def test_unchanged_type_group_is_kept(self, db_session, group_factory, notifier):
        group = group_factory()
        type_group_id = group.type_group_id

        updated = asyncio.run(GroupService(db_session, notifier).update(
            group.id, {"name": group.type_group.name, "type_group": group.type_group.type_group}
        ))

        assert updated.type_group_id == type_group_id
        assert db_session.query(TypeGroup).count() == 1

    def test_same_representative_is_not_invited_again(self, db_session, group_factory, notifier):
        group = group_factory(representative_email="rep@example.com")
        asyncio.run(
            GroupService(db_session, notifier).update(group.id, {"representative": "REP@example.com"})
        )
        notifier.send_registration_invite.assert_not_called()

    def test_new_representative_reuses_row(self, db_session, group_factory, notifier):
        group = group_factory()
        representative_id = group.representative_id

        updated = asyncio.run(
            GroupService(db_session, notifier).update(group.id, {"representative": "new@example.com"})
        )

        assert updated.representative_id == representative_id
        assert updated.representative.email == "new@example.com"
        notifier.send_registration_invite.assert_called_once()

    def test_unknown_group(self, db_session, notifier):
        with pytest.raises(NotFoundError):
            asyncio.run(GroupService(db_session, notifier).update(999, {"entity": "x"}))


class TestDelete:

    def test_delete_cascades(self, db_session, group_factory, member_factory, notifier):
        group = group_factory()
        member_factory(group=group)

        GroupService(db_session, notifier).delete(group.id)

        assert db_session.query(Group).count() == 0
        assert db_session.query(Member).count() == 0
        assert db_session.query(Representative).count() == 0
        assert db_session.query(TypeGroup).count() == 0

    def test_shared_type_group_is_kept(self, db_session, group_factory, notifier):
        first = group_factory()
        group_factory(type_group=first.type_group)

        GroupService(db_session, notifier).delete(first.id)

        assert db_session.query(TypeGroup).count() == 1


class TestOwnershipLookup:

    def test_lookups(self, db_session, group_factory, user_factory):
        rep = user_factory(role=Role.REPRESENTATIVE)
        group = group_factory(representative_user=rep)
        lookup = GroupOwnershipLookup(db_session)

        assert lookup.creator_of(group.id) == group.creator_user_id
        assert lookup.representative_user_of(group.id) == rep.id

    def test_missing_group(self, db_session):
        lookup = GroupOwnershipLookup(db_session)
        with pytest.raises(NotFoundError):
            lookup.creator_of(1)
        with pytest.raises(NotFoundError):
            lookup.representative_user_of(1)
