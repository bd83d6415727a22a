"""Tests for the unused-binding pruner."""

import pytest
from nbmigrate.core.migration import prune_source


def _prune(source: str, path: str = "Screen.tsx"):
    return prune_source(source, path)


# =========================================================================
# Imports
# =========================================================================

class TestImportPruning:

    def test_unused_import_statement_is_removed(self):
        output, removed = _prune(
            "import { useState } from 'react';\n"
            "import { helper } from './util';\n"
            "\n"
            "export const A = () => helper();\n"
        )
        assert output == (
            "import { helper } from './util';\n"
            "\n"
            "export const A = () => helper();\n"
        )
        assert removed == ["useState"]

    def test_unused_specifiers_are_removed_from_a_list(self):
        output, removed = _prune("import { a, b, c } from 'x';\nexport const y = b;\n")
        assert output == "import { b } from 'x';\nexport const y = b;\n"
        assert sorted(removed) == ["a", "c"]

    def test_dead_named_part_next_to_default(self):
        output, _ = _prune(
            "import React, { useMemo } from 'react';\n\nexport const A = () => <div />;\n"
        )
        assert output == "import React from 'react';\n\nexport const A = () => <div />;\n"

    def test_react_is_kept_when_jsx_is_present(self):
        source = "import React from 'react';\n\nexport const A = () => <div />;\n"
        assert _prune(source) == (source, [])

    def test_react_is_removed_without_jsx(self):
        output, removed = _prune("import React from 'react';\n\nexport const a = 1;\n", "util.ts")
        assert output == "\nexport const a = 1;\n"
        assert removed == ["React"]

    def test_side_effect_import_is_untouched(self):
        source = "import './polyfills';\nexport const a = 1;\n"
        assert _prune(source) == (source, [])

    @pytest.mark.parametrize("source", [
        "import type { ButtonProps } from 'x';\n\nexport type Variant = ButtonProps['variant'];\n",
        "import { Item } from './types';\nexport const list = useState<Item[]>([]);\n",
        "import { Item } from './types';\nexport const text = `${Item.label}`;\n",
        "import { Row } from './row';\nexport const A = () => <Row />;\n",
        "import * as Icons from './icons';\nexport const A = Icons.plus;\n",
    ])
    def test_type_generic_template_and_jsx_references_keep_imports(self, source):
        assert _prune(source) == (source, [])


# =========================================================================
# Declarations
# =========================================================================

class TestDeclarationPruning:

    def test_removal_cascades_across_rounds(self):
        output, removed = _prune("import { a } from 'x';\nconst b = a;\nexport const c = 1;\n")
        assert output == "export const c = 1;\n"
        assert removed == ["b", "a"]

    def test_initializer_with_side_effects_is_kept(self):
        source = "const unused = register();\nexport const c = 1;\n"
        assert _prune(source) == (source, [])

    def test_function_initializer_is_effect_free(self):
        output, removed = _prune("const handler = () => track();\nexport const c = 1;\n")
        assert output == "export const c = 1;\n"
        assert removed == ["handler"]

    def test_unused_destructured_property(self):
        output, removed = _prune(
            "import { theme } from './theme';\n"
            "const { space, color } = theme;\n"
            "export const pad = space;\n"
        )
        assert output == (
            "import { theme } from './theme';\n"
            "const { space } = theme;\n"
            "export const pad = space;\n"
        )
        assert removed == ["color"]

    def test_one_of_several_declarators(self):
        output, _ = _prune("const a = 1, b = 2;\nexport const c = b;\n")
        assert output == "const b = 2;\nexport const c = b;\n"

    def test_unused_type_alias(self):
        output, removed = _prune("type Local = string;\nexport const a = 1;\n", "types.ts")
        assert output == "export const a = 1;\n"
        assert removed == ["Local"]

    def test_exported_declarations_are_untouched(self):
        source = "export const unused = 1;\nexport type Unused = string;\n"
        assert _prune(source, "types.ts") == (source, [])


class TestPruneSafety:

    def test_file_with_syntax_errors_is_unchanged(self):
        source = "import { a } from 'x';\nconst = ;\n"
        assert _prune(source) == (source, [])

    def test_clean_file_is_byte_identical(self):
        source = "import { a } from 'x';\n\nexport default function A() {\n  return a;\n}\n"
        output, removed = _prune(source)
        assert output == source
        assert removed == []
