from __future__ import annotations

from pathlib import Path

from alembic.script import ScriptDirectory

from locallibrary.adapters.sqlalchemy.migrations import MIGRATIONS_PATH, build_config


def test_build_config_points_at_bundled_migrations() -> None:
    config = build_config()

    script_location = config.get_main_option("script_location")
    assert script_location is not None
    assert Path(script_location).resolve() == MIGRATIONS_PATH
    assert dict(config.attributes) == {}


def test_revisions_form_a_single_chain() -> None:
    script = ScriptDirectory.from_config(build_config())

    assert script.get_heads() == ["0002"]
    head = script.get_revision("0002")
    assert head is not None
    assert head.down_revision == "0001"
