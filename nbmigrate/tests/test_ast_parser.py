"""Tests for the AST parser module."""

import pytest
from nbmigrate.core.ast_parser import (
    ImportStatement,
    SourceFile,
    detect_language,
    get_parser,
    is_supported_file,
    parse_file,
    parse_source,
    should_skip_directory,
)
from nbmigrate.core.ast_parser.jsx import (
    find_element_usages,
    is_shadowed,
    iter_elements,
    meaningful_children,
    read_attributes,
    tag_name,
)
from nbmigrate.core.config import MigrationSettings
from nbmigrate.core.migration.imports import build_binding_table


# =========================================================================
# Sample TSX source fixtures
# =========================================================================

IMPORTS = '''
import React from 'react';
import type { ReactNode } from 'react';
import { Box, Button as Btn, type ButtonProps } from 'native-base';
import * as Native from 'native-base';
import './polyfills';
'''

SIMPLE_SCREEN = '''
import { Box, HStack } from 'native-base';

export const Screen = () => (
  <Box p={4} bg="white" {...rest}>
    <HStack space={2}>
      hello
    </HStack>
  </Box>
);
'''

LOCAL_COMPONENT = '''
import { Box } from 'native-base';

const Section = ({ Box }) => <Box p={2} />;

function Card() {
  return <Box m={1} />;
}
'''

BLOCK_SHADOW = '''
import { Box } from 'native-base';

export function Screen() {
  if (flag) {
    const Box = makeBox();
    return <Box />;
  }
  return <Box />;
}
'''

TYPE_ONLY = '''
import type { Box } from 'native-base';

export const Screen = () => <Box />;
'''

MEMBER_TAG = '''
import { Alert } from 'native-base';

export const Banner = () => (
  <Alert>
    <Alert.Title>Hi</Alert.Title>
  </Alert>
);
'''


def _imports(source: str, path: str = "Screen.tsx"):
    parsed = parse_source(source, path)
    return parsed, get_parser(parsed.language).extract_imports(parsed)


# =========================================================================
# Language detection
# =========================================================================

class TestLanguageDetection:

    def test_tsx(self):
        assert detect_language("src/Screen.tsx") == "tsx"

    def test_jsx_and_js_use_tsx_grammar(self):
        assert detect_language("Screen.jsx") == "tsx"
        assert detect_language("Screen.js") == "tsx"

    def test_typescript(self):
        assert detect_language("theme.ts") == "typescript"

    def test_unsupported(self):
        assert detect_language("README.md") is None

    def test_declaration_files_are_skipped(self):
        assert not is_supported_file("types/index.d.ts")
        assert is_supported_file("types/index.ts")

    def test_skip_directories(self):
        assert should_skip_directory("node_modules")
        assert not should_skip_directory("src")


# =========================================================================
# Parsing
# =========================================================================

class TestParsing:

    def test_parse_source_returns_source_file(self):
        parsed = parse_source(SIMPLE_SCREEN, "Screen.tsx")
        assert isinstance(parsed, SourceFile)
        assert parsed.language == "tsx"
        assert parsed.root.type == "program"
        assert parsed.text == SIMPLE_SCREEN

    def test_parse_file(self, tmp_path):
        target = tmp_path / "Screen.tsx"
        target.write_text(SIMPLE_SCREEN)
        parsed = parse_file(str(target))
        assert parsed.file_path == str(target)
        assert not parsed.errors

    def test_syntax_error_is_recorded_not_raised(self):
        parsed = parse_source("const x = <Box\n", "Broken.tsx")
        assert parsed.errors

    def test_unknown_language_raises(self):
        with pytest.raises(ValueError):
            get_parser("cobol")


# =========================================================================
# Imports
# =========================================================================

class TestImports:

    def test_all_statements_extracted(self):
        _, statements = _imports(IMPORTS)
        assert [s.source_path for s in statements] == [
            "react", "react", "native-base", "native-base", "./polyfills",
        ]
        assert all(isinstance(s, ImportStatement) for s in statements)

    def test_default_import(self):
        _, statements = _imports(IMPORTS)
        spec = statements[0].specifiers[0]
        assert spec.kind == "default"
        assert spec.local == "React"

    def test_type_only_statement(self):
        _, statements = _imports(IMPORTS)
        assert statements[1].type_only
        assert not statements[2].type_only

    def test_named_specifiers_with_alias_and_inline_type(self):
        _, statements = _imports(IMPORTS)
        specs = statements[2].specifiers
        assert [(s.imported, s.local) for s in specs] == [
            ("Box", "Box"), ("Button", "Btn"), ("ButtonProps", "ButtonProps"),
        ]
        assert [s.inline_type for s in specs] == [False, False, True]

    def test_namespace_import(self):
        _, statements = _imports(IMPORTS)
        spec = statements[3].specifiers[0]
        assert spec.kind == "namespace"
        assert spec.local == "Native"

    def test_side_effect_import(self):
        _, statements = _imports(IMPORTS)
        assert statements[4].is_side_effect

    def test_semicolon_detected(self):
        _, statements = _imports("import { Box } from 'native-base'\n")
        assert not statements[0].has_semicolon
        _, statements = _imports(IMPORTS)
        assert statements[0].has_semicolon

    def test_binding_table_only_has_legacy_paths(self):
        _, statements = _imports(IMPORTS)
        table = build_binding_table(statements, MigrationSettings())
        assert set(table) == {"Box", "Btn", "ButtonProps", "Native"}
        assert table["Btn"].imported == "Button"
        assert table["ButtonProps"].type_only
        assert not table["Box"].type_only


# =========================================================================
# JSX accessors
# =========================================================================

class TestJsx:

    def test_elements_in_document_order(self):
        parsed = parse_source(SIMPLE_SCREEN, "Screen.tsx")
        tags = [tag_name(e, parsed.source) for e in iter_elements(parsed.root)]
        assert tags == ["Box", "HStack"]

    def test_attributes_in_source_order_with_spread(self):
        parsed = parse_source(SIMPLE_SCREEN, "Screen.tsx")
        box = next(iter_elements(parsed.root))
        attributes = read_attributes(box, parsed.source)
        assert [a.label for a in attributes] == ["p", "bg", "{...spread}"]
        assert attributes[2].is_spread
        assert parsed.node_text(attributes[1].value_node) == '"white"'

    def test_boolean_shorthand_has_no_value(self):
        parsed = parse_source("const x = <Switch isDisabled />;\n", "x.tsx")
        element = next(iter_elements(parsed.root))
        attr = read_attributes(element, parsed.source)[0]
        assert attr.name == "isDisabled"
        assert attr.value_node is None

    def test_meaningful_children_skip_whitespace_and_comments(self):
        parsed = parse_source("const x = (\n  <Box>\n    {/* note */}\n    <Text />\n  </Box>\n);\n", "x.tsx")
        box = next(iter_elements(parsed.root))
        children = meaningful_children(box, parsed.source)
        assert len(children) == 1
        assert tag_name(children[0], parsed.source) == "Text"


# =========================================================================
# Provenance
# =========================================================================

def _usages(source: str):
    parsed, statements = _imports(source)
    table = build_binding_table(statements, MigrationSettings())
    return parsed, find_element_usages(parsed, table)


class TestProvenance:

    def test_imported_usages_found_outer_first(self):
        _, usages = _usages(SIMPLE_SCREEN)
        assert [u.tag for u in usages] == ["Box", "HStack"]
        assert usages[0].component == "Box"
        assert not usages[0].is_self_closing

    def test_parameter_shadowing_is_not_a_usage(self):
        parsed, usages = _usages(LOCAL_COMPONENT)
        assert len(usages) == 1
        assert parsed.node_text(usages[0].node) == "<Box m={1} />"

    def test_block_declaration_shadows(self):
        parsed, usages = _usages(BLOCK_SHADOW)
        assert len(usages) == 1
        line = usages[0].node.start_point[0]
        assert BLOCK_SHADOW.splitlines()[line].strip() == "return <Box />;"

    def test_type_only_binding_never_matches(self):
        _, usages = _usages(TYPE_ONLY)
        assert usages == []

    def test_member_tags_are_not_usages(self):
        _, usages = _usages(MEMBER_TAG)
        assert [u.tag for u in usages] == ["Alert"]

    def test_is_shadowed_direct(self):
        parsed = parse_source(LOCAL_COMPONENT, "x.tsx")
        elements = list(iter_elements(parsed.root))
        assert is_shadowed(elements[0], "Box", parsed.source)
        assert not is_shadowed(elements[1], "Box", parsed.source)
