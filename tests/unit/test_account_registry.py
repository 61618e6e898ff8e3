"""Unit tests for the account registry file."""

import stat

import pytest

from ccm.accounts import parse_registry, render_registry
from ccm.errors import AlreadyExists, CorruptRegistry, InvalidName, NotFound


@pytest.mark.unit
class TestRegistryFormatUnit:
    """Unit tests for the registry reader and writer."""

    def test_empty_text(self):
        assert parse_registry("") == {}
        assert parse_registry("  \n") == {}
        assert parse_registry("{}\n") == {}

    def test_canonical_layout(self):
        text = render_registry({"work": "d29yaw==", "personal": "cGVyc29uYWw="})

        assert text == '{\n  "work": "d29yaw==",\n  "personal": "cGVyc29uYWw="\n}\n'
        assert render_registry({}) == "{}\n"

    def test_reader_keeps_file_order(self):
        text = '{\n  "b": "Yg==",\n  "a": "YQ==",\n  "c": "Yw=="\n}\n'

        assert list(parse_registry(text)) == ["b", "a", "c"]

    @pytest.mark.parametrize("text", [
        '{\n  "a": "YQ==",\n}\n',           # dangling separator
        '{\n,  "a": "YQ=="\n}\n',           # separator after the opening brace
        '{\n  "a": "YQ==" "b": "Yg=="\n}',  # missing separator
        '{"a":"YQ==","b":"Yg=="}',           # single line
    ])
    def test_reader_tolerates_separator_damage(self, text):
        entries = parse_registry(text)

        assert entries["a"] == "YQ=="

    def test_duplicate_name_first_wins(self):
        text = '{\n  "a": "YQ==",\n  "a": "Yg=="\n}\n'

        assert parse_registry(text) == {"a": "YQ=="}

    @pytest.mark.parametrize("text", [
        '{\n  "a": "YQ=="\n',                     # no closing brace
        '  "a": "YQ=="\n}\n',                     # no opening brace
        '{\n  "a": "YQ=="\n}\n{}\n',              # trailing content
        '{\n  "a": "not base64!"\n}\n',           # bad blob
        '{\n  "../etc": "YQ=="\n}\n',             # bad name
        '{\n  "a": YQ==\n}\n',                    # unquoted value
        '{\n  "a": "YQ=="\n}\ngarbage\n',
    ])
    def test_reader_rejects_corruption(self, text):
        with pytest.raises(CorruptRegistry):
            parse_registry(text)


@pytest.mark.unit
class TestAccountRegistryUnit:
    """Unit tests for registry mutations."""

    def test_missing_file_is_empty(self, registry):
        assert registry.list() == []
        assert len(registry) == 0
        assert registry.get("work") is None

    def test_upsert_appends_then_replaces_in_place(self, registry):
        assert registry.upsert("work", "d29yaw==") is True
        assert registry.upsert("home", "aG9tZQ==") is True
        assert registry.upsert("work", "bmV3") is False

        accounts = registry.list()

        assert [a.name for a in accounts] == ["work", "home"]
        assert registry.get("work") == "bmV3"
        assert "home" in registry

    def test_file_is_owner_only(self, registry):
        registry.upsert("work", "d29yaw==")

        assert stat.S_IMODE(registry.path.stat().st_mode) == 0o600

    def test_upsert_rejects_bad_input(self, registry):
        with pytest.raises(InvalidName):
            registry.upsert("bad name", "YQ==")
        with pytest.raises(ValueError):
            registry.upsert("ok", 'has"quote')
        with pytest.raises(InvalidName):
            registry.upsert("a\n", "YQ==")
        with pytest.raises(ValueError):
            registry.upsert("ok", "YQ==\n")

        assert not registry.path.exists()

    def test_remove(self, registry):
        registry.upsert("a", "YQ==")
        registry.upsert("b", "Yg==")

        registry.remove("a")

        assert registry.read() == {"b": "Yg=="}
        assert registry.path.read_text() == '{\n  "b": "Yg=="\n}\n'

    def test_remove_missing_leaves_file_unchanged(self, registry):
        registry.upsert("a", "YQ==")
        before = registry.path.read_text()

        with pytest.raises(NotFound):
            registry.remove("ghost")

        assert registry.path.read_text() == before
        assert len(registry) == 1

    def test_remove_repairs_legacy_separator_damage(self, registry):
        registry.path.write_text('{\n  "a": "YQ==",\n  "b": "Yg==",\n}\n')

        registry.remove("b")

        assert registry.path.read_text() == '{\n  "a": "YQ=="\n}\n'

    def test_repeated_insert_remove_cycles_stay_canonical(self, registry):
        names = ["one", "two", "three", "four"]

        for _ in range(5):
            for name in names:
                registry.upsert(name, "YQ==")
            for name in reversed(names[1:]):
                registry.remove(name)
            registry.remove("one")

            assert registry.path.read_text() == "{}\n"

        for name in names:
            registry.upsert(name, "YQ==")
        registry.remove("two")
        text = registry.path.read_text()

        assert parse_registry(text) == {"one": "YQ==", "three": "YQ==", "four": "YQ=="}
        assert text == render_registry(parse_registry(text))
        assert ",\n}" not in text
        assert "{\n," not in text

    def test_rename_keeps_blob_and_position(self, registry):
        registry.upsert("a", "YQ==")
        registry.upsert("b", "Yg==")
        registry.upsert("c", "Yw==")

        registry.rename("b", "bee")

        assert list(registry.read().items()) == [("a", "YQ=="), ("bee", "Yg=="), ("c", "Yw==")]

    def test_rename_errors(self, registry):
        registry.upsert("a", "YQ==")
        registry.upsert("b", "Yg==")
        before = registry.path.read_text()

        with pytest.raises(NotFound):
            registry.rename("ghost", "new")
        with pytest.raises(AlreadyExists):
            registry.rename("a", "b")
        with pytest.raises(InvalidName):
            registry.rename("a", "../etc")

        assert registry.path.read_text() == before

    def test_corrupt_file_is_not_overwritten(self, registry):
        registry.path.write_text("garbage")

        with pytest.raises(CorruptRegistry):
            registry.upsert("a", "YQ==")

        assert registry.path.read_text() == "garbage"

    def test_lock_file_created_beside_registry(self, registry):
        registry.upsert("a", "YQ==")

        assert registry.lock_path.exists()
        assert registry.lock_path.parent == registry.path.parent
