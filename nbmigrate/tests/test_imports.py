"""Tests for import splitting, merging and redirection."""

from nbmigrate.core.config import MigrationSettings
from nbmigrate.core.migration import DiagnosticKind, Diagnostics, migrate_source, redirect_source
from nbmigrate.core.migration.imports import ImportGroup


def _migrate(source: str, settings: MigrationSettings = None):
    diagnostics = Diagnostics("Screen.tsx")
    result = migrate_source(source, "Screen.tsx", settings, diagnostics)
    return result, diagnostics


# =========================================================================
# Sample sources
# =========================================================================

MIXED = '''import { Button, Switch, Text, type ButtonProps } from 'native-base';

export const A = (props: ButtonProps) => (
  <Text>
    <Button onPress={f}>Go</Button>
    <Switch isChecked={on} onToggle={t} />
  </Text>
);
'''

EXISTING_PRIMITIVES = '''import { Platform } from 'react-native';
import { Box } from 'native-base';

export const os = Platform.OS;
export const A = () => <Box p={2} />;
'''

RETAGGED_PROPS = '''import { Box, type BoxProps } from 'native-base';

export const A = (p: BoxProps) => <Box />;
'''

TYPE_STATEMENT = '''import type { ButtonProps } from 'native-base';
import { Button } from 'native-base';

export const A = (p: ButtonProps) => <Button onPress={f}>Go</Button>;
'''

ALIASED = '''import { Button as Btn } from 'native-base';

export const A = () => <Btn onPress={f}>Go</Btn>;
'''

REDIRECTS = '''import type { Foo } from "old-lib";
import { Bar } from 'old-lib/sub';
export { Baz } from 'old-lib';
import { Qux } from 'old-library';
import x from 'other';
'''


# =========================================================================
# Split / relocate
# =========================================================================

class TestSplit:

    def test_specifiers_grouped_per_target_module(self):
        result, _ = _migrate(MIXED)
        assert result.output.startswith(
            "import { Text } from 'native-base';\n"
            "import { Button, type ButtonProps } from '@nordlys/components/Button';\n"
            "import { Switch } from '@nordlys/components/Switch';\n"
            "\n"
        )
        assert result.relocated == 3

    def test_helpers_merge_into_existing_import(self):
        result, _ = _migrate(EXISTING_PRIMITIVES)
        assert result.output.startswith(
            "import { Platform, View, StyleSheet } from 'react-native';\n"
            "\n"
            "export const os = Platform.OS;\n"
        )
        assert result.output.count("from 'react-native'") == 1

    def test_props_type_of_retagged_component_stays(self):
        result, diagnostics = _migrate(RETAGGED_PROPS)
        assert result.output.startswith(
            "import { type BoxProps } from 'native-base';\n"
            "import { View } from 'react-native';\n"
        )
        records = diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)
        assert any("BoxProps has no View equivalent" in d.message for d in records)

    def test_type_only_statement_stays_type_only(self):
        result, _ = _migrate(TYPE_STATEMENT)
        assert "import type { ButtonProps } from '@nordlys/components/Button';" in result.output
        assert "import { Button } from '@nordlys/components/Button';" in result.output
        assert "native-base" not in result.output

    def test_alias_is_preserved(self):
        result, _ = _migrate(ALIASED)
        assert result.output == (
            "import { Button as Btn } from '@nordlys/components/Button';\n"
            "\n"
            'export const A = () => <Btn onPress={f} text="Go" />;\n'
        )

    def test_fallback_import_receives_leftovers(self):
        settings = MigrationSettings(fallback_import="@legacy/shim")
        result, _ = _migrate(
            "import { Box, Text } from 'native-base';\n\nexport const A = () => <Text><Box /></Text>;\n",
            settings,
        )
        assert result.output.startswith(
            "import { Text } from '@legacy/shim';\n"
            "import { View } from 'react-native';\n"
        )

    def test_disabled_component_stays_on_legacy_path(self):
        settings = MigrationSettings(components=["Box"])
        result, _ = _migrate(
            "import { Box, Button } from 'native-base';\n\n"
            "export const A = () => <Box><Button onPress={f}>Go</Button></Box>;\n",
            settings,
        )
        assert result.output.startswith(
            "import { Button } from 'native-base';\n"
            "import { View } from 'react-native';\n"
        )
        assert "<Button onPress={f}>Go</Button>" in result.output


class TestImportGroup:

    def test_inline(self):
        group = ImportGroup(module="react-native", named=["View", "StyleSheet"])
        assert group.render(";") == "import { View, StyleSheet } from 'react-native';"

    def test_type_only(self):
        group = ImportGroup(module="x", type_only=True, named=["A"])
        assert group.render() == "import type { A } from 'x'"

    def test_default_and_named(self):
        group = ImportGroup(module="x", default="D", named=["A"])
        assert group.render() == "import D, { A } from 'x'"

    def test_namespace_gets_its_own_statement(self):
        group = ImportGroup(module="x", default="D", namespace="* as NS", named=["A"])
        assert group.render() == "import D, * as NS from 'x'\nimport { A } from 'x'"

    def test_long_list_breaks_per_line(self):
        names = [f"Component{i}" for i in range(8)]
        group = ImportGroup(module="@nordlys/components", named=names)
        rendered = group.render(";")
        assert rendered.startswith("import {\n  Component0,\n")
        assert rendered.endswith("  Component7,\n} from '@nordlys/components';")

    def test_add_deduplicates(self):
        group = ImportGroup(module="x")
        group.add("named", "A")
        group.add("named", "A")
        assert group.named == ["A"]


# =========================================================================
# Redirect
# =========================================================================

class TestRedirect:

    def test_paths_specifiers_and_quotes(self):
        output, changed = redirect_source(REDIRECTS, "index.ts", "old-lib", "new-lib")
        assert changed == 3
        assert output == (
            'import type { Foo } from "new-lib";\n'
            "import { Bar } from 'new-lib/sub';\n"
            "export { Baz } from 'new-lib';\n"
            "import { Qux } from 'old-library';\n"
            "import x from 'other';\n"
        )

    def test_nothing_to_redirect_returns_input(self):
        source = "import x from 'other';\n"
        output, changed = redirect_source(source, "index.ts", "old-lib", "new-lib")
        assert output is source
        assert changed == 0
