import sys
from unittest.mock import patch

import pytest


def _forget_fetchkit():
    keys_to_remove = [k for k in sys.modules if k.startswith("fetchkit")]
    for k in keys_to_remove:
        del sys.modules[k]


def test_core_imports_without_network_deps():
    """
    Ensure the registry and contract import even if 'requests' is missing.
    """
    # patch.dict restores sys.modules on exit, so other tests keep their modules
    with patch.dict(sys.modules):
        _forget_fetchkit()
        sys.modules["requests"] = None
        sys.modules["urllib3"] = None

        import fetchkit
        assert fetchkit.ResourceFetcher is not None

        import fetchkit.core.registry
        assert fetchkit.core.registry.fetch is not None


def test_lazy_adapter_imports():
    """
    Importing fetchkit must not import the concrete HTTP adapter.
    """
    with patch.dict(sys.modules):
        _forget_fetchkit()

        import fetchkit
        assert "fetchkit.infra.adapters.http_fetcher" not in sys.modules

        adapter_cls = fetchkit.HttpResourceFetcher
        assert adapter_cls.__name__ == "HttpResourceFetcher"
        assert "fetchkit.infra.adapters.http_fetcher" in sys.modules


def test_unknown_attribute_raises():
    import fetchkit

    with pytest.raises(AttributeError):
        fetchkit.does_not_exist
