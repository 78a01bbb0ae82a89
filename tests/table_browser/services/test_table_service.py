from pathlib import Path

import pytest

from table_browser.config.model import TableConfig
from table_browser.core.table_loader import TableConfigError
from table_browser.services.table_service import TableManager


def _cfg(name: str, **raw) -> TableConfig:
    return TableConfig(raw={"name": name, **raw}, source_path=Path("/tmp/tables/x.json"), index=0)


@pytest.fixture()
def manager() -> TableManager:
    return TableManager(
        {
            "People": _cfg("People", columns={"Name": ["Ann", "Bob", "Cid"]}),
            "Broken": _cfg("Broken"),
        }
    )


def test_tables_are_loaded_lazily(manager: TableManager):
    assert list(manager) == ["People", "Broken"]
    assert len(manager) == 2
    assert not manager.is_loaded("People")

    ds = manager["People"]

    assert manager.is_loaded("People")
    assert manager["People"] is ds


def test_unknown_table(manager: TableManager):
    with pytest.raises(KeyError):
        manager["Nope"]
    assert manager.get("Nope") is None


def test_broken_config_propagates(manager: TableManager):
    with pytest.raises(TableConfigError):
        manager["Broken"]
    assert not manager.is_loaded("Broken")


def test_reload_restores_deleted_rows(manager: TableManager):
    ds = manager["People"]
    ds.delete_rows([0, 1])
    assert ds.row_count() == 1

    fresh = manager.reload("People")

    assert fresh is not ds
    assert fresh.uid != ds.uid
    assert fresh.column("Name").values == ["Ann", "Bob", "Cid"]


def test_loaded_names_follow_config_order(manager: TableManager):
    assert manager.loaded_names() == []
    manager["People"]
    assert manager.loaded_names() == ["People"]
