import pytest

from tursofork.errors_catalog import remediation_hint


def test_remediation_hint_formats_database_name():
    hint = remediation_hint("fork_may_exist", database="pr-7")

    assert "Database fork 'pr-7' may already exist." in hint
    assert "Set 'replace: true'" in hint


def test_remediation_hint_rejects_unknown_code():
    with pytest.raises(KeyError):
        remediation_hint("nope")
