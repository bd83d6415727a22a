"""Tests for the component rewriters, run through the migration engine."""

from nbmigrate.core.migration import DiagnosticKind, Diagnostics, migrate_source


def _migrate(components: str, body: str):
    source = f"import {{ {components} }} from 'native-base';\n\n{body}"
    diagnostics = Diagnostics("Screen.tsx")
    result = migrate_source(source, "Screen.tsx", diagnostics=diagnostics)
    return result.output, diagnostics


# =========================================================================
# Box / Stack / Pressable
# =========================================================================

class TestLayoutPrimitives:

    def test_box_becomes_view_with_style_block(self):
        output, _ = _migrate("Box", (
            "export const Card = () => (\n"
            '  <Box bg="white" p={4} testID="card">\n'
            "    <Title />\n"
            "  </Box>\n"
            ");\n"
        ))
        assert output == (
            "import { View, StyleSheet } from 'react-native';\n"
            "\n"
            "export const Card = () => (\n"
            '  <View testID="card" style={styles.box0}>\n'
            "    <Title />\n"
            "  </View>\n"
            ");\n"
            "\n"
            "const styles = StyleSheet.create({\n"
            "  box0: {\n"
            "    backgroundColor: 'white',\n"
            "    padding: 4,\n"
            "  },\n"
            "});\n"
        )

    def test_box_without_style_props_gets_no_block(self):
        output, _ = _migrate("Box", "export const A = () => <Box testID=\"a\" />;\n")
        assert '<View testID="a" />' in output
        assert "StyleSheet" not in output

    def test_existing_style_is_merged(self):
        output, _ = _migrate("Box", "export const A = () => <Box p={2} style={extra} />;\n")
        assert "<View style={[styles.box0, extra]} />" in output

    def test_variant_sets_default_radius(self):
        output, _ = _migrate("Box", 'export const A = () => <Box variant="container" p={2} />;\n')
        assert "    padding: 2,\n    borderRadius: 'lg',\n" in output

    def test_blocks_are_numbered_per_kind(self):
        output, _ = _migrate("Box, VStack", (
            "export const A = () => (\n"
            "  <VStack space={2}>\n"
            "    <Box p={1} />\n"
            "    <Box m={1} />\n"
            "  </VStack>\n"
            ");\n"
        ))
        assert '<Stack direction="column" style={styles.vstack0}>' in output
        assert "<View style={styles.box0} />" in output
        assert "<View style={styles.box1} />" in output

    def test_hstack_becomes_row_stack(self):
        output, _ = _migrate("HStack", (
            "export const Row = () => (\n"
            '  <HStack space={2} alignItems="center">\n'
            "    <Item />\n"
            "  </HStack>\n"
            ");\n"
        ))
        assert output == (
            "import { Stack } from '@nordlys/aurora';\n"
            "import { StyleSheet } from 'react-native';\n"
            "\n"
            "export const Row = () => (\n"
            '  <Stack direction="row" style={styles.hstack0}>\n'
            "    <Item />\n"
            "  </Stack>\n"
            ");\n"
            "\n"
            "const styles = StyleSheet.create({\n"
            "  hstack0: {\n"
            "    gap: 2,\n"
            "    alignItems: 'center',\n"
            "  },\n"
            "});\n"
        )

    def test_stack_divider_is_dropped_with_warning(self):
        output, diagnostics = _migrate("VStack", "export const A = () => <VStack divider={<Line />} />;\n")
        assert "divider" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.DROPPED_PROP)) == 1

    def test_pressable_gets_button_role(self):
        output, _ = _migrate("Pressable", (
            "export const A = () => (\n"
            "  <Pressable onPress={go} p={2}>\n"
            "    <Label />\n"
            "  </Pressable>\n"
            ");\n"
        ))
        assert output.startswith("import { Pressable, StyleSheet } from 'react-native';\n")
        assert '<Pressable onPress={go} style={styles.pressable0} accessibilityRole="button">' in output

    def test_pressable_keeps_explicit_role(self):
        output, _ = _migrate(
            "Pressable", 'export const A = () => <Pressable onPress={go} accessibilityRole="link" />;\n'
        )
        assert output.count("accessibilityRole") == 1


# =========================================================================
# Button / Switch
# =========================================================================

class TestButton:

    def test_text_child_and_renamed_props(self):
        output, _ = _migrate("Button", "export const Save = () => <Button onPress={save} isDisabled>Save</Button>;\n")
        assert output == (
            "import { Button } from '@nordlys/components/Button';\n"
            "\n"
            'export const Save = () => <Button onPress={save} disabled text="Save" />;\n'
        )

    def test_left_icon_becomes_icon_name(self):
        output, _ = _migrate(
            "Button, Icon",
            'export const Add = () => <Button onPress={add} leftIcon={<Icon name="plus" />}>Add</Button>;\n',
        )
        assert '<Button onPress={add} icon="plus" text="Add" />' in output
        assert "@nordlys/components/Icon" not in output

    def test_variant_mapping(self):
        output, _ = _migrate("Button", 'export const A = () => <Button onPress={f} variant="outline">Go</Button>;\n')
        assert 'text="Go" variant="secondary" type="solid"' in output

    def test_unknown_prop_is_dropped(self):
        output, diagnostics = _migrate("Button", 'export const A = () => <Button onPress={f} foo="x">Go</Button>;\n')
        assert "foo" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.UNRECOGNIZED_PROP)) == 1

    def test_layout_props_are_dropped_with_warning(self):
        output, diagnostics = _migrate("Button", "export const A = () => <Button onPress={f} mt={2}>Go</Button>;\n")
        assert "mt=" not in output
        assert any("layout props" in d.message for d in diagnostics.of_kind(DiagnosticKind.DROPPED_PROP))

    def test_missing_on_press_needs_review(self):
        _, diagnostics = _migrate("Button", "export const A = () => <Button>Go</Button>;\n")
        assert any("onPress" in d.message for d in diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW))


class TestSwitch:

    def test_children_and_label_become_sub_components(self):
        output, _ = _migrate("Switch", (
            "export const Row = () => (\n"
            '  <Switch isChecked={on} onToggle={toggle} label="Get notified">\n'
            "    Alerts\n"
            "  </Switch>\n"
            ");\n"
        ))
        assert (
            "  <Switch value={on} onValueChange={toggle}>\n"
            "    <Switch.Label>Alerts</Switch.Label>\n"
            "    <Switch.Description>Get notified</Switch.Description>\n"
            "  </Switch>\n"
        ) in output

    def test_inline_text_child(self):
        output, diagnostics = _migrate("Switch", "export const A = () => <Switch isChecked={v}>Dark  mode</Switch>;\n")
        assert "<Switch.Label>Dark mode</Switch.Label>" in output
        assert "isChecked" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)) == 0

    def test_spacing_moves_to_wrapper(self):
        output, _ = _migrate("Switch", (
            "export const Row = () => (\n"
            "  <Switch isChecked={on} onToggle={toggle} mt={2} />\n"
            ");\n"
        ))
        assert (
            "  <View style={styles.switch0}>\n"
            "    <Switch value={on} onValueChange={toggle} />\n"
            "  </View>\n"
        ) in output
        assert "import { StyleSheet, View } from 'react-native';" in output


# =========================================================================
# Avatar / Input / Typography
# =========================================================================

class TestAvatar:

    def test_image_uri_composite(self):
        output, _ = _migrate("Avatar", 'export const A = () => <Avatar imageUri="https://x/a.png" size="md" />;\n')
        assert "<Avatar size=\"md\" image={{ source: { uri: 'https://x/a.png' } }} />" in output

    def test_icon_name_with_fill(self):
        output, _ = _migrate("Avatar", 'export const A = () => <Avatar iconName="user" bg="gray.500" />;\n')
        assert "<Avatar icon={{ name: 'user', fill: 'core.neutral.HN5' }} />" in output

    def test_priority_warns_about_ignored_variant(self):
        output, diagnostics = _migrate("Avatar", 'export const A = () => <Avatar iconName="user" imageUri={uri} />;\n')
        assert "image=" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.UNSUPPORTED_COMPOSITE)) == 1

    def test_letters_pass_through_with_warning(self):
        output, diagnostics = _migrate("Avatar", 'export const A = () => <Avatar letters="AB" />;\n')
        assert '<Avatar letters="AB" />' in output
        assert len(diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)) == 1


class TestInput:

    def test_renames_and_wrapper(self):
        output, _ = _migrate("Input", (
            "export const Form = () => (\n"
            '  <Input placeholder="Email" onChangeText={setEmail} mt={4} />\n'
            ");\n"
        ))
        assert (
            "  <View style={styles.input0}>\n"
            '    <Input label="Email" onChange={setEmail} />\n'
            "  </View>\n"
        ) in output

    def test_missing_label_and_handler_need_review(self):
        _, diagnostics = _migrate("Input", "export const A = () => <Input value={v} />;\n")
        messages = [d.message for d in diagnostics.of_kind(DiagnosticKind.MANUAL_REVIEW)]
        assert any("label" in m for m in messages)
        assert any("onChange" in m for m in messages)


class TestTypography:

    def test_color_remapped_and_font_props_dropped(self):
        output, diagnostics = _migrate(
            "Typography", 'export const A = () => <Typography color="gray.500" fontSize="lg">Hi</Typography>;\n'
        )
        assert '<Typography color="core.neutral.HN5">Hi</Typography>' in output
        assert len(diagnostics.of_kind(DiagnosticKind.DROPPED_PROP)) == 1


# =========================================================================
# Alert / Badge / Icon
# =========================================================================

class TestAlert:

    def test_slots_become_props(self):
        output, _ = _migrate("Alert", (
            "export const Banner = () => (\n"
            '  <Alert status="error">\n'
            "    <Alert.Title>Oops</Alert.Title>\n"
            "    <Alert.Description>Try again</Alert.Description>\n"
            "  </Alert>\n"
            ");\n"
        ))
        assert '<Alert status="error" title="Oops" description="Try again" />' in output

    def test_other_content_is_dropped_with_warning(self):
        output, diagnostics = _migrate("Alert", (
            "export const Banner = () => (\n"
            '  <Alert description="Saved">\n'
            "    <Extra />\n"
            "  </Alert>\n"
            ");\n"
        ))
        assert "Extra" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.DROPPED_PROP)) == 1


class TestBadge:

    def test_text_badge(self):
        output, _ = _migrate("Badge", 'export const A = () => <Badge colorScheme="success">New</Badge>;\n')
        assert '<Badge state="success" text="New" size="md" />' in output

    def test_styled_badge_without_text_is_a_dot(self):
        output, _ = _migrate("Badge", 'export const A = () => <Badge bg="red.500" rounded="full" />;\n')
        assert "<View style={styles.badge0} />" in output
        assert "@nordlys/components/Badge" not in output


class TestIcon:

    def test_size_and_color_converted(self):
        output, _ = _migrate("Icon", 'export const A = () => <Icon name="close" size={18} color="gray.500" />;\n')
        assert '<Icon name="close" size="2xl" color="core.neutral.HN5" />' in output

    def test_icon_set_is_dropped(self):
        output, diagnostics = _migrate("Icon", 'export const A = () => <Icon as={Feather} name="x" />;\n')
        assert "Feather" not in output
        assert len(diagnostics.of_kind(DiagnosticKind.DROPPED_PROP)) == 1
