"""schemawalk rule bundles: per-dialect syntax, keyword and format rules."""
from schemawalk.bundle.base import RuleBundle, SyntaxCache
from schemawalk.bundle.draft3 import DraftV3Bundle
from schemawalk.bundle.draft4 import DraftV4Bundle
from schemawalk.bundle.registry import BundleFactory, VersionRegistry

__all__ = [
    "RuleBundle",
    "SyntaxCache",
    "DraftV3Bundle",
    "DraftV4Bundle",
    "BundleFactory",
    "VersionRegistry",
]
