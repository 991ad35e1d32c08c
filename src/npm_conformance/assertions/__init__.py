"""Assertion registry.

``DEFAULT_RULES`` is the ordered rule set a full conformance run evaluates.
Add new checks by writing a predicate returning ``list[AssertionResult]`` and
registering it here.
"""

from __future__ import annotations

from .base import Assertion, Evaluate
from .bundles import check_bundles
from .consistency import check_version_consistency
from .manifests import (
    check_manifest_identity,
    check_resolution_fields,
    check_update_group,
    check_version_format,
)
from .module_tree import check_module_tree
from .root_files import check_root_metadata
from .secondary import check_secondary_manifests
from .typings import check_typings

DEFAULT_RULES: tuple[Assertion, ...] = (
    Assertion(
        assertion_id="root-metadata",
        description="README exists and names the project and its repository",
        evaluate=check_root_metadata,
    ),
    Assertion(
        assertion_id="manifest-identity",
        description="package.json name equals the published package name",
        evaluate=check_manifest_identity,
    ),
    Assertion(
        assertion_id="version-format",
        description="package.json version is MAJOR.MINOR.PATCH with the placeholder replaced",
        evaluate=check_version_format,
    ),
    Assertion(
        assertion_id="resolution-fields",
        description="format fields and exports map match the expected shape exactly",
        evaluate=check_resolution_fields,
    ),
    Assertion(
        assertion_id="update-group",
        description="ng-update package group lists the package and is fully templated",
        evaluate=check_update_group,
    ),
    Assertion(
        assertion_id="typings",
        description="type declarations are current and export declarations",
        evaluate=check_typings,
    ),
    Assertion(
        assertion_id="bundles",
        description="flattened bundles exist with exports, source maps and license headers",
        evaluate=check_bundles,
    ),
    Assertion(
        assertion_id="module-tree",
        description="per-module tree holds no retired code-generation artifacts",
        evaluate=check_module_tree,
    ),
    Assertion(
        assertion_id="secondary-manifests",
        description="secondary manifests use relative paths and declare no exports map",
        evaluate=check_secondary_manifests,
    ),
    Assertion(
        assertion_id="version-consistency",
        description="secondary manifests and bundle headers carry the package version",
        evaluate=check_version_consistency,
    ),
)

RULES_BY_ID: dict[str, Assertion] = {rule.assertion_id: rule for rule in DEFAULT_RULES}


class UnknownAssertionError(ValueError):
    """Raised when a rule ID is not found in the registry."""


def get_rule(assertion_id: str) -> Assertion:
    """Return the registered rule for ``assertion_id``, or raise UnknownAssertionError."""
    rule = RULES_BY_ID.get(assertion_id)
    if rule is None:
        known = ", ".join(RULES_BY_ID)
        raise UnknownAssertionError(f"Unknown assertion '{assertion_id}'. Known assertions: {known}")
    return rule


def select_rules(assertion_ids: list[str] | None) -> tuple[Assertion, ...]:
    """Return the named rules in registry order, or every rule when none are named."""
    if not assertion_ids:
        return DEFAULT_RULES
    wanted = {get_rule(assertion_id).assertion_id for assertion_id in assertion_ids}
    return tuple(rule for rule in DEFAULT_RULES if rule.assertion_id in wanted)


__all__ = [
    "Assertion",
    "DEFAULT_RULES",
    "Evaluate",
    "RULES_BY_ID",
    "UnknownAssertionError",
    "get_rule",
    "select_rules",
]
