"""
spectable.config.defaults - Built-in configuration values.
"""

CONFIG_FILENAME = ".spectable.toml"

ENV_PREFIX = "SPECTABLE_"

DEFAULT_CONFIG = {
    "scanner": {
        # Lines searched after a method header for a block label
        "label_window": 50,
        # Lines (header included) searched for the method's opening brace
        "brace_window": 5,
        "lifecycle_methods": ["setup", "setupSpec", "cleanup", "cleanupSpec"],
        "patterns": ["**/*Spec.groovy", "**/*Test.groovy"],
        "ignore": ["build", ".gradle", "node_modules", "target"],
    },
    "results": {
        "report_dir": "build/test-results/test",
        "report_name": "TEST-{class_name}.xml",
        # Tried in order; the first non-empty result wins
        "sources": ["junit_xml", "console"],
        # Unrolled feature name shapes used to recover parameters from
        # console lines. Named groups become parameter names.
        "phrases": {
            "maximum": r"^maximum of (?P<a>\d+) and (?P<b>\d+) is (?P<c>\d+)$",
            "name_age": r"^(?P<name>[^0-9]+?)\s+is\s+(?P<age>\d+)\s+years\s+old$",
        },
    },
}
