# tests/commands/test_share.py
"""Tests for the share commands."""

from atomspace.commands import add, query, share


def _cat(data_dir, owner="alice"):
    return add.add_node("ConceptNode", "cat", owner=owner, data_dir=data_dir).atom


class TestShare:
    def test_share(self, data_dir) -> None:
        cat = _cat(data_dir)
        result = share.share(cat.id, "bob", owner="alice", data_dir=data_dir)

        assert result.success is True
        assert result.share.atom_id == cat.id
        assert result.share.source_owner == "alice"
        assert result.share.target_owner == "bob"
        assert result.share.share_type == "read"

    def test_self_share_fails(self, data_dir) -> None:
        cat = _cat(data_dir)
        result = share.share(cat.id, "alice", owner="alice", data_dir=data_dir)
        assert result.success is False

    def test_unknown_type_fails(self, data_dir) -> None:
        cat = _cat(data_dir)
        result = share.share(cat.id, "bob", share_type="own", owner="alice", data_dir=data_dir)
        assert result.success is False
        assert "share type" in result.error


class TestSharedAndPublic:
    def test_shared_visible_only_to_target(self, data_dir) -> None:
        cat = _cat(data_dir)
        share.share(cat.id, "bob", owner="alice", data_dir=data_dir)

        assert [a.id for a in share.shared(owner="bob", data_dir=data_dir).atoms] == [cat.id]
        assert share.shared(owner="carol", data_dir=data_dir).atoms == []
        assert share.public(owner="carol", data_dir=data_dir).atoms == []

    def test_shared_filtered_by_source(self, data_dir) -> None:
        cat = _cat(data_dir)
        share.share(cat.id, "bob", owner="alice", data_dir=data_dir)

        result = share.shared(source_owner="carol", owner="bob", data_dir=data_dir)
        assert result.atoms == []

    def test_public_visible_to_anyone(self, data_dir) -> None:
        cat = _cat(data_dir)
        share.share(cat.id, "bob", public=True, owner="alice", data_dir=data_dir)

        result = share.public(owner="carol", data_dir=data_dir)
        assert [a.id for a in result.atoms] == [cat.id]
        assert result.atoms[0].owner_id == "alice"


class TestCopy:
    def test_copy(self, data_dir) -> None:
        cat = _cat(data_dir)
        created = share.share(cat.id, "bob", share_type="copy", owner="alice", data_dir=data_dir)

        result = share.copy(created.share.id, owner="bob", data_dir=data_dir)
        assert result.success is True
        assert result.copy.owner_id == "bob"
        assert result.copy.id != cat.id
        assert query.get(result.copy.id, owner="bob", data_dir=data_dir).success is True

    def test_copy_read_share_fails(self, data_dir) -> None:
        cat = _cat(data_dir)
        created = share.share(cat.id, "bob", owner="alice", data_dir=data_dir)

        result = share.copy(created.share.id, owner="bob", data_dir=data_dir)
        assert result.success is False
        assert "not copy" in result.error

    def test_copy_unknown_share(self, data_dir) -> None:
        result = share.copy("missing", owner="bob", data_dir=data_dir)
        assert result.success is False
        assert "Share not found" in result.error
