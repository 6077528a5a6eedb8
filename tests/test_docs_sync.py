"""
Keeps the business summary in sync with the integration scenarios.

Fails when a scenario is added without documentation, or when the
documentation mentions a scenario that no longer exists.
"""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / 'scripts' / 'validate_test_docs_sync.py'


@pytest.fixture(scope='module')
def sync():
    loader_spec = importlib.util.spec_from_file_location('validate_test_docs_sync', SCRIPT)
    module = importlib.util.module_from_spec(loader_spec)
    loader_spec.loader.exec_module(module)
    return module


@pytest.fixture(scope='module')
def tested(sync):
    classes = sync.extract_test_classes_and_methods(sync.TEST_FILE)
    methods = {m for ms in classes.values() for m in ms}
    return set(classes), methods


@pytest.fixture(scope='module')
def documented(sync):
    return sync.extract_documented_tests(sync.DOC_FILE)


class TestDocumentationSync:
    """Ensure scenario documentation stays in sync with actual tests."""

    def test_doc_files_exist(self, sync):
        assert sync.TEST_FILE.exists(), f"Test file not found: {sync.TEST_FILE}"
        assert sync.DOC_FILE.exists(), f"Documentation file not found: {sync.DOC_FILE}"

    def test_all_test_classes_documented(self, tested, documented):
        missing = tested[0] - documented[0]
        assert not missing, f"Scenario classes not documented: {missing}"

    def test_all_test_methods_documented(self, tested, documented):
        missing = tested[1] - documented[1]
        assert not missing, f"Scenario methods not documented: {missing}"

    def test_no_stale_documentation(self, tested, documented):
        stale = (documented[0] - tested[0]) | (documented[1] - tested[1])
        assert not stale, f"Documented scenarios no longer exist: {stale}"
