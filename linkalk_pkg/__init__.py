"""linkalk package: tokenizer, postfix conversion, polynomial evaluation and CLI."""

__all__ = [
    "config",
    "polynomial",
    "operations",
    "tokenizer",
    "postfix",
    "calculator",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "validate_expression",
]
