#!/usr/bin/env python3
"""
Check that docs/test_scenarios_business_summary.md documents every class and
method in tests/test_integration_scenarios.py, and nothing else.

Run: python scripts/validate_test_docs_sync.py
"""

import re
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
TEST_FILE = PROJECT_ROOT / 'tests' / 'test_integration_scenarios.py'
DOC_FILE = PROJECT_ROOT / 'docs' / 'test_scenarios_business_summary.md'


def extract_test_classes_and_methods(test_file: Path) -> dict[str, list[str]]:
    """Map each Test* class in the file to its test_* methods."""
    classes = {}
    current_class = None

    for line in test_file.read_text().split('\n'):
        class_match = re.match(r'^class (Test\w+)', line)
        if class_match:
            current_class = class_match.group(1)
            classes[current_class] = []
        elif current_class:
            method_match = re.match(r'^\s+def (test_\w+)', line)
            if method_match:
                classes[current_class].append(method_match.group(1))

    return classes


def extract_documented_tests(doc_file: Path) -> tuple[set[str], set[str]]:
    """Class and method names referenced as **Test Class** / **Test Method**."""
    content = doc_file.read_text()
    classes = set(re.findall(r'\*\*Test Class\*\*:\s*`(Test\w+)`', content))
    methods = set(re.findall(r'\*\*Test Method\*\*:\s*`(test_\w+)`', content))
    return classes, methods


def main():
    for path in (TEST_FILE, DOC_FILE):
        if not path.exists():
            print(f"❌ File not found: {path}")
            sys.exit(1)

    test_classes = extract_test_classes_and_methods(TEST_FILE)
    doc_classes, doc_methods = extract_documented_tests(DOC_FILE)
    test_methods = {m for methods in test_classes.values() for m in methods}

    errors = [f"Missing class documentation: {c}" for c in set(test_classes) - doc_classes]
    errors += [f"Missing method documentation: {m}" for m in test_methods - doc_methods]
    warnings = [f"Documented class no longer exists: {c}" for c in doc_classes - set(test_classes)]
    warnings += [f"Documented method no longer exists: {m}" for m in doc_methods - test_methods]

    print("=" * 60)
    print("Scenario Documentation Sync")
    print("=" * 60)
    print(f"Test classes: {len(test_classes)}   documented: {len(doc_classes)}")
    print(f"Test methods: {len(test_methods)}   documented: {len(doc_methods)}")

    for error in sorted(errors):
        print(f"❌ {error}")
    for warning in sorted(warnings):
        print(f"⚠️  {warning}")
    if not errors and not warnings:
        print("✅ All scenarios are documented and in sync!")

    sys.exit(1 if errors else 0)


if __name__ == '__main__':
    main()
