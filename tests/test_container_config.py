import pytest
from pydantic import ValidationError

from gridstash.config import ContainerSettings, build_container, load_container_settings
from gridstash.items import ItemType
from gridstash.provider import RenderMode


def test_bundled_layouts():
    layouts = load_container_settings()
    assert {"backpack", "hotbar", "weapon_slot"} <= set(layouts)

    backpack = layouts["backpack"]
    assert (backpack.width, backpack.height) == (8, 4)
    assert backpack.render_mode == RenderMode.GRID
    assert backpack.max_items == -1

    slot = layouts["weapon_slot"]
    assert slot.render_mode == RenderMode.SINGLE
    assert slot.max_items == 1
    assert slot.allowed_type == ItemType.WEAPON


def test_build_container_wires_provider_policy():
    settings = ContainerSettings(name="belt", width=3, height=1, allowed_type="consumable", max_items=2)
    manager = build_container(settings)
    assert (manager.width, manager.height) == (3, 1)
    assert manager.render_mode == RenderMode.GRID
    assert manager.provider.allowed_type == ItemType.CONSUMABLE
    assert manager.provider.max_items == 2


def test_non_positive_cap_means_unlimited():
    settings = ContainerSettings(name="sack", width=2, height=2, max_items=0)
    assert settings.max_items == -1


def test_invalid_sizes_are_rejected():
    with pytest.raises(ValidationError):
        ContainerSettings(name="void", width=0, height=2)
    with pytest.raises(ValidationError):
        ContainerSettings(name="odd", width=2, height=2, render_mode="hexagonal")


def test_env_var_points_at_custom_file(tmp_path, monkeypatch):
    path = tmp_path / "containers.yaml"
    path.write_text(
        "containers:\n  stash:\n    width: 10\n    height: 6\n    locked_types: [utility]\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GRIDSTASH_CONTAINERS_FILE", str(path))
    layouts = load_container_settings()
    assert list(layouts) == ["stash"]
    assert layouts["stash"].locked_types == [ItemType.UTILITY]
    manager = build_container(layouts["stash"])
    assert manager.provider.locked_types == {ItemType.UTILITY}
