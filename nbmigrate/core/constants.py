"""Shared constants for nbmigrate.

Defaults used when no configuration file is given.
"""

# =============================================================================
# Legacy library
# =============================================================================

# Import paths whose components are migrated
DEFAULT_SOURCE_IMPORTS = ("native-base",)

# =============================================================================
# Target modules
# =============================================================================

# Layout primitives (View, StyleSheet, Pressable)
PRIMITIVES_MODULE = "react-native"

VIEW_TAG = "View"

STYLESHEET_NAME = "StyleSheet"

# Legacy component → where its replacement is imported from. `name` is
# only given when the target export differs from the legacy one (the
# tag is then rewritten); `types` lists prop types that move along.
DEFAULT_TARGETS = {
    "Box": {"module": PRIMITIVES_MODULE, "name": VIEW_TAG},
    "HStack": {"module": "@nordlys/aurora", "name": "Stack"},
    "VStack": {"module": "@nordlys/aurora", "name": "Stack"},
    "Pressable": {"module": PRIMITIVES_MODULE, "types": ["PressableProps"]},
    "Button": {"module": "@nordlys/components/Button", "types": ["ButtonProps"]},
    "Switch": {"module": "@nordlys/components/Switch", "types": ["SwitchProps"]},
    "Avatar": {"module": "@nordlys/components/Avatar", "types": ["AvatarProps"]},
    "Input": {"module": "@nordlys/components/Input", "types": ["InputProps"]},
    "Typography": {"module": "@nordlys/components/Typography", "types": ["TypographyProps"]},
    "Alert": {"module": "@nordlys/components/Alert", "types": ["AlertProps"]},
    "Badge": {"module": "@nordlys/components/Badge", "types": ["BadgeProps"]},
    "Icon": {"module": "@nordlys/components/Icon", "types": ["IconProps"]},
}

# =============================================================================
# Configuration
# =============================================================================

CONFIG_ENV_VAR = "NBMIGRATE_CONFIG"

DEFAULT_CONFIG_FILE = "nbmigrate.yaml"
