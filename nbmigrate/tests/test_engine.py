"""End-to-end tests for the migration engine."""

from nbmigrate.core.config import MigrationSettings
from nbmigrate.core.migration import DiagnosticKind, Diagnostics, migrate_source
from nbmigrate.core.migration.rewriters import ButtonRewriter


# =========================================================================
# Sample sources
# =========================================================================

CARD = '''import React from 'react';
import { Box } from 'native-base';

export const Card = () => (
  <Box bg="blue.500" p={4} m={2} rounded="md">
    <Title />
  </Box>
);
'''

CARD_MIGRATED = '''import React from 'react';
import { View, StyleSheet } from 'react-native';

export const Card = () => (
  <View style={styles.box0}>
    <Title />
  </View>
);

const styles = StyleSheet.create({
  box0: {
    backgroundColor: 'blue.500',
    padding: 4,
    margin: 2,
    borderRadius: 'md',
  },
});
'''

UNRELATED = '''import React from 'react';
import { View } from 'react-native';

export const Plain = () => <View />;
'''

SHADOWED = '''import { Box } from 'native-base';

export const Section = ({ Box }) => <Box p={2} />;

export function Card() {
  return <Box m={1} />;
}
'''

STYLES_TAKEN = '''import { Box } from 'native-base';

export const styles = {};
export const A = () => <Box p={2} />;
'''

NO_SEMICOLONS = '''import { Box } from 'native-base'

export const A = () => <Box p={2} />
'''

TYPE_REFERENCE = '''import { Box } from 'native-base';

export type BoxLike = typeof Box;
export const A = () => <Box />;
'''

NESTED_ICON = '''import { Button, Icon } from 'native-base';

export const Add = () => (
  <Button onPress={add} leftIcon={<Icon name="plus" />}>
    Add
  </Button>
);
'''

MIXED = '''import { Box, Button } from 'native-base';

export const A = () => (
  <Box p={2}>
    <Button onPress={f}>Go</Button>
  </Box>
);
'''


def _migrate(source: str, settings: MigrationSettings = None):
    diagnostics = Diagnostics("Screen.tsx")
    return migrate_source(source, "Screen.tsx", settings, diagnostics), diagnostics


# =========================================================================
# Whole-file behaviour
# =========================================================================

class TestMigrateSource:

    def test_card(self):
        result, diagnostics = _migrate(CARD)
        assert result.output == CARD_MIGRATED
        assert result.migrated == 1
        assert result.relocated == 1
        assert result.changed
        assert len(diagnostics) == 0

    def test_second_run_is_a_no_op(self):
        first, _ = _migrate(CARD)
        second, _ = _migrate(first.output)
        assert second.output == first.output
        assert not second.changed

    def test_file_without_legacy_imports_is_byte_identical(self):
        result, _ = _migrate(UNRELATED)
        assert result.output is UNRELATED
        assert not result.changed

    def test_legacy_import_with_nothing_to_migrate(self):
        source = "import { Text } from 'native-base';\n\nexport const A = () => <Text>hi</Text>;\n"
        result, _ = _migrate(source)
        assert result.output == source
        assert result.migrated == 0

    def test_shadowed_tag_is_untouched(self):
        result, _ = _migrate(SHADOWED)
        assert "export const Section = ({ Box }) => <Box p={2} />;" in result.output
        assert "  return <View style={styles.box0} />;" in result.output
        assert result.migrated == 1

    def test_stylesheet_name_avoids_existing_binding(self):
        result, _ = _migrate(STYLES_TAKEN)
        assert "<View style={migratedStyles.box0} />" in result.output
        assert "const migratedStyles = StyleSheet.create({" in result.output

    def test_semicolon_style_is_followed(self):
        result, _ = _migrate(NO_SEMICOLONS)
        assert result.output.startswith("import { View, StyleSheet } from 'react-native'\n")
        assert result.output.endswith("\n})\n")

    def test_non_jsx_references_are_renamed(self):
        result, _ = _migrate(TYPE_REFERENCE)
        assert "export type BoxLike = typeof View;" in result.output
        assert "export const A = () => <View />;" in result.output

    def test_unused_helper_imports_are_pruned(self):
        result, _ = _migrate(NESTED_ICON)
        assert '<Button onPress={add} icon="plus" text="Add" />' in result.output
        assert "Icon" not in result.output.split("\n\n")[0]
        assert result.pruned == ["Icon"]

    def test_pruning_can_be_disabled(self):
        settings = MigrationSettings(prune_unused=False)
        result, _ = _migrate(NESTED_ICON, settings)
        assert "import { Icon } from '@nordlys/components/Icon';" in result.output
        assert result.pruned == []

    def test_unmapped_token_is_reported_once(self):
        result, diagnostics = _migrate("import { Box } from 'native-base';\n\nexport const A = () => <Box p=\"huge\" />;\n")
        assert "    padding: 'huge',\n" in result.output
        assert len(diagnostics.of_kind(DiagnosticKind.UNMAPPED_TOKEN)) == 1

    def test_space_token_on_a_dimension_is_reported(self):
        result, diagnostics = _migrate("import { Box } from 'native-base';\n\nexport const A = () => <Box w=\"lg\" />;\n")
        assert "    width: 'lg',\n" in result.output
        assert len(diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)) == 1

    def test_token_helpers(self):
        settings = MigrationSettings(token_import="@nordlys/tokens")
        result, _ = _migrate("import { Box } from 'native-base';\n\nexport const A = () => <Box p=\"xl\" />;\n", settings)
        assert result.output.startswith(
            "import { View, StyleSheet } from 'react-native';\n"
            "import { space } from '@nordlys/tokens';\n"
        )
        assert "    padding: space['2xl'],\n" in result.output


class TestStyleBlocks:

    def test_unstyled_element_still_takes_an_index(self):
        result, _ = _migrate(
            "import { Box } from 'native-base';\n\n"
            "export const A = () => (\n"
            "  <Card>\n"
            '    <Box testID="a" />\n'
            "    <Box p={4} />\n"
            "  </Card>\n"
            ");\n"
        )
        assert '<View testID="a" />' in result.output
        assert "<View style={styles.box1} />" in result.output
        assert "  box1: {\n    padding: 4,\n  },\n" in result.output
        assert "box0" not in result.output

    def test_styles_of_an_icon_inside_a_dropped_prop_are_not_emitted(self):
        result, _ = _migrate(
            "import { Button, Icon } from 'native-base';\n\n"
            'export const Add = () => <Button onPress={f} leftIcon={<Icon name="plus" mr={2} />}>Add</Button>;\n'
        )
        assert '<Button onPress={f} icon="plus" text="Add" />' in result.output
        assert "StyleSheet" not in result.output
        assert "icon0" not in result.output

    def test_styles_of_dropped_alert_content_are_not_emitted(self):
        settings = MigrationSettings(prune_unused=False)
        result, _ = _migrate(
            "import { Alert, Box } from 'native-base';\n\n"
            "export const Banner = () => (\n"
            '  <Alert description="Saved">\n'
            "    <Box p={4} />\n"
            "  </Alert>\n"
            ");\n",
            settings,
        )
        assert '<Alert description="Saved" />' in result.output
        assert "StyleSheet" not in result.output
        assert "box0" not in result.output

    def test_used_blocks_survive_next_to_dropped_ones(self):
        result, _ = _migrate(
            "import { Box, Button, Icon } from 'native-base';\n\n"
            "export const A = () => (\n"
            "  <Box p={2}>\n"
            '    <Button onPress={f} leftIcon={<Icon name="plus" mr={2} />}>Add</Button>\n'
            "  </Box>\n"
            ");\n"
        )
        assert "<View style={styles.box0}>" in result.output
        assert "  box0: {\n    padding: 2,\n  },\n" in result.output
        assert "icon0" not in result.output


class TestWrapping:

    def test_template_literal_inside_wrapped_element_is_unchanged(self):
        result, _ = _migrate(
            "import { Typography } from 'native-base';\n\n"
            "export const A = () => (\n"
            '  <Typography mt="sm">\n'
            "    {`line1\n"
            "line2`}\n"
            "  </Typography>\n"
            ");\n"
        )
        assert "  <View style={styles.typography0}>\n" in result.output
        assert "      {`line1\nline2`}\n" in result.output

    def test_tab_indented_source_gets_space_indented_output(self):
        result, _ = _migrate(
            "import { Typography } from 'native-base';\n\n"
            "export function A() {\n"
            "\treturn (\n"
            '\t\t<Typography mt="sm">\n'
            "\t\t\t<Label />\n"
            "\t\t</Typography>\n"
            "\t);\n"
            "}\n"
        )
        assert (
            "\t\t<View style={styles.typography0}>\n"
            "      <Typography>\n"
            "        <Label />\n"
            "      </Typography>\n"
            "    </View>\n"
        ) in result.output


class TestFailureIsolation:

    def test_failed_element_is_left_as_written(self, monkeypatch):
        def broken(self, usage, ctx):
            raise RuntimeError("boom")

        monkeypatch.setattr(ButtonRewriter, "rewrite", broken)
        result, diagnostics = _migrate(MIXED)
        assert "<Button onPress={f}>Go</Button>" in result.output
        assert "<View style={styles.box0}>" in result.output
        assert result.migrated == 1
        records = diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)
        assert any("rewrite failed (boom)" in d.message for d in records)
