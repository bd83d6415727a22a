"""Tests for the stylesheet emitter."""

from nbmigrate.core.migration.edits import EditPlan
from nbmigrate.core.migration.printer import Expr, TokenRef
from nbmigrate.core.migration.styles import StyleSheetEmitter


def _render(emitter: StyleSheetEmitter, semicolon: str = ";") -> str:
    return EditPlan(b"").render_fragments(emitter.render(semicolon))


class TestStyleSheetEmitter:

    def test_empty_emitter_renders_nothing(self):
        emitter = StyleSheetEmitter()
        assert emitter.is_empty
        assert emitter.render() == []

    def test_block_names_count_per_kind(self):
        emitter = StyleSheetEmitter()
        assert emitter.declare("Box") == "box0"
        assert emitter.declare("HStack") == "hstack0"
        assert emitter.declare("Box") == "box1"
        assert list(emitter.blocks) == ["box0", "hstack0", "box1"]

    def test_first_value_wins(self):
        emitter = StyleSheetEmitter()
        block = emitter.declare("Box")
        emitter.add_property(block, "padding", 4)
        emitter.add_property(block, "padding", 8)
        assert emitter.blocks == {"box0": {"padding": 4}}

    def test_reference_uses_identifier(self):
        assert StyleSheetEmitter().reference("box0") == "styles.box0"
        assert StyleSheetEmitter("migratedStyles").reference("box0") == "migratedStyles.box0"

    def test_render(self):
        emitter = StyleSheetEmitter()
        block = emitter.declare("Box")
        emitter.add_property(block, "backgroundColor", "white")
        emitter.add_property(block, "padding", 4)
        emitter.add_property(block, "margin", TokenRef("space", "md"))
        emitter.add_property(block, "width", Expr.of("size * 2"))
        assert _render(emitter) == (
            "const styles = StyleSheet.create({\n"
            "  box0: {\n"
            "    backgroundColor: 'white',\n"
            "    padding: 4,\n"
            "    margin: space.md,\n"
            "    width: size * 2,\n"
            "  },\n"
            "});\n"
        )

    def test_render_without_semicolon(self):
        emitter = StyleSheetEmitter()
        emitter.add_property(emitter.declare("Badge"), "alignSelf", "flex-start")
        assert _render(emitter, "").endswith("})\n")

    def test_quoted_keys(self):
        emitter = StyleSheetEmitter()
        emitter.add_property(emitter.declare("Box"), "font-size", 12)
        assert "    'font-size': 12,\n" in _render(emitter)

    def test_same_declarations_render_identically(self):
        def build():
            emitter = StyleSheetEmitter()
            for kind in ("Box", "VStack", "Box"):
                emitter.add_property(emitter.declare(kind), "flex", 1)
            return _render(emitter)

        assert build() == build()

    def test_unstyled_elements_take_an_index(self):
        emitter = StyleSheetEmitter()
        assert emitter.advance("Box") == "box0"
        assert emitter.declare("Box") == "box1"
        assert emitter.allocated("Box") == 2
        assert emitter.allocated("HStack") == 0
        assert list(emitter.blocks) == ["box1"]

    def test_discard_unreferenced(self):
        emitter = StyleSheetEmitter()
        for _ in range(11):
            emitter.add_property(emitter.declare("Box"), "flex", 1)
        text = "<View style={styles.box10} />\n<View style={other.styles.box0} />"
        dropped = emitter.discard_unreferenced(text)
        assert list(emitter.blocks) == ["box10"]
        assert dropped[:2] == ["box0", "box1"]
