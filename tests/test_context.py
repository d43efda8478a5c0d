from gridsheets.core.context import DEFAULT_SCOPE, ActiveSheetSelector, get_client_scope


def test_default_until_selected():
    selector = ActiveSheetSelector("defaultCollection")
    assert selector.get_active() == "defaultCollection"
    assert selector.set_active("Budget") == "Budget"
    assert selector.get_active(DEFAULT_SCOPE) == "Budget"


def test_scopes_are_independent():
    selector = ActiveSheetSelector("defaultCollection")
    selector.set_active("A", "alice")
    assert selector.get_active("alice") == "A"
    assert selector.get_active("bob") == "defaultCollection"
    selector.clear("alice")
    assert selector.get_active("alice") == "defaultCollection"


def test_resolve_prefers_override():
    selector = ActiveSheetSelector("defaultCollection")
    selector.set_active("A")
    assert selector.resolve(override="B") == "B"
    assert selector.resolve(override="") == "A"


def test_client_scope_header():
    assert get_client_scope(None) == DEFAULT_SCOPE
    assert get_client_scope("  ") == DEFAULT_SCOPE
    assert get_client_scope(" tab-1 ") == "tab-1"
