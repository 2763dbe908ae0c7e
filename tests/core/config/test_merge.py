# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Os testes asseguram que:
- valores escalares são sobrescritos corretamente
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- conflitos de tipo são detectados e rejeitados explicitamente
- objetos de entrada não são mutados durante o merge
"""

import pytest

try:
    from orderflow.core.config.merge import deep_merge
    from orderflow.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge/errors modules. Implement:\n"
            "- src/orderflow/core/config/merge.py (deep_merge)\n"
            "- src/orderflow/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = deep_merge(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dicts():
    """
    Verifica o merge recursivo de dicionários aninhados.

    Invariantes:
        - Chaves irmãs não sobrescritas são preservadas em todos os níveis
    """
    _require_imports()
    base = {"workflow": {"collaborators": {"timeout_seconds": 5.0, "retry": {"max_attempts": 3}}}}
    override = {"workflow": {"collaborators": {"retry": {"max_attempts": 1}}}}
    out = deep_merge(base, override)
    assert out["workflow"]["collaborators"]["timeout_seconds"] == 5.0
    assert out["workflow"]["collaborators"]["retry"]["max_attempts"] == 1


def test_merge_list_replaced():
    _require_imports()
    out = deep_merge({"codes": ["P1", "P2"]}, {"codes": ["P3"]})
    assert out["codes"] == ["P3"]


def test_merge_int_and_float_are_compatible():
    _require_imports()
    out = deep_merge({"timeout_seconds": 5}, {"timeout_seconds": 2.5})
    assert out["timeout_seconds"] == 2.5


def test_merge_none_override_replaces_value():
    _require_imports()
    out = deep_merge({"timeout_seconds": 5.0}, {"timeout_seconds": None})
    assert out["timeout_seconds"] is None


def test_merge_type_conflict_raises_with_key_path():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge({"workflow": {"validation": {"concurrent_checks": True}}},
                   {"workflow": {"validation": "off"}})
    assert "workflow.validation" in str(exc.value)


def test_merge_requires_dict_roots():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["not", "a", "dict"])
