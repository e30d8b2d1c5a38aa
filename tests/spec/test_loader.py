# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for spec compilation and the bootstrap spec."""

import sys
from pathlib import Path

import pytest

from genconf.errors import ConfigSyntaxError, MultiplicityError, SpecCompileError, UnknownElementError
from genconf.model.elements import NamedSection
from genconf.spec import BOOTSTRAP_SPEC, CompiledSpec, bootstrap_tree, compile_spec, load_spec
from genconf.spec.keywords import DeclarationKind, declaration_of, meta_sections

# ###############
# Test Helpers
# ###############

# A spec exercising every declaration form: single and multi directives with
# `optional` and `etc`, required lists, meta sections with references, and
# inline sections.
FULL_SPEC = r"""
# single directives
SingleDirective Single1 /\w+/
SingleDirective Single2 /\w+/ /\w+/
SingleDirective Single1EtcA /\w+/ etc
SingleDirective Single1Opt1a /\w+/ optional /\w+/
SingleDirective Single1OptEtcA /\w+/ optional /\w+/ etc

# multiple directives
MultiDirective Multi1 /\w+/
MultiDirective Multi1OptEtc /\w+/ optional /\w+/ etc

# required directives
MultiDirective Req1 /\d+/
SingleDirective Req2 /\d+/
RequiredDirectives Req1 Req2

<MetaSection dummy>
    SingleDirective dummy /\w/
</MetaSection>

SingleSectionRef SingleSection1 dummy
MultiSectionRef MultiSection1 dummy
NamedSectionRef NamedSection1 dummy

<SingleSection ReqSingleSection>
    SingleDirective dummy /\w/
</SingleSection>
RequiredSections ReqSingleSection
"""


# ###############
# Bootstrap
# ###############


class TestBootstrap:
    def test_bootstrap_parses(self) -> None:
        tree = bootstrap_tree()
        assert tree.is_root
        assert "section" in meta_sections(tree)

    def test_bootstrap_is_parsed_once(self) -> None:
        assert bootstrap_tree() is bootstrap_tree()

    def test_bootstrap_text_is_a_module_constant(self) -> None:
        assert "<MetaSection section>" in BOOTSTRAP_SPEC

    def test_bootstrap_meta_section_refers_to_itself(self) -> None:
        meta = meta_sections(bootstrap_tree())["section"]
        refs = [declaration_of(child) for child in meta.children if child.name == "NamedSectionRef"]
        assert {(d.name, d.meta) for d in refs if d is not None} == {
            ("MultiSection", "section"),
            ("SingleSection", "section"),
            ("NamedSection", "section"),
        }

    def test_bootstrap_declarations(self) -> None:
        kinds = {
            (d.kind, d.name)
            for d in (declaration_of(child) for child in bootstrap_tree().children)
            if d is not None
        }
        assert (DeclarationKind.MULTI_DIRECTIVE, "SingleDirective") in kinds
        assert (DeclarationKind.SINGLE_DIRECTIVE, "RequiredDirectives") in kinds
        assert (DeclarationKind.NAMED_SECTION, "MetaSection") in kinds


# ###############
# Compilation
# ###############


class TestCompileSpec:
    def test_compiles_full_spec(self) -> None:
        spec = compile_spec(FULL_SPEC)
        assert isinstance(spec, CompiledSpec)
        assert list(spec.meta_sections) == ["dummy"]
        assert isinstance(spec.meta_section("dummy"), NamedSection)

    def test_meta_sections_are_read_only(self) -> None:
        spec = compile_spec(FULL_SPEC)
        with pytest.raises(TypeError):
            spec.meta_sections["other"] = spec.meta_section("dummy")  # type: ignore[index]

    def test_unknown_meta_section(self) -> None:
        with pytest.raises(KeyError):
            compile_spec(FULL_SPEC).meta_section("missing")

    def test_empty_spec_compiles(self) -> None:
        assert compile_spec("").root.children == []

    def test_compile_is_idempotent(self) -> None:
        first = compile_spec(FULL_SPEC)
        second = compile_spec(FULL_SPEC)
        assert first.root == second.root
        config = "Req1 1\nReq2 2\n<ReqSingleSection>\n  dummy x\n</ReqSingleSection>\n"
        assert first.parse(config) == second.parse(config)

    def test_compiled_spec_is_not_mutated_by_use(self) -> None:
        spec = compile_spec(FULL_SPEC)
        before = spec.root.model_copy(deep=True)
        spec.parse("Req1 1\nReq1 2\nReq2 3\n<ReqSingleSection>\n  dummy x\n</ReqSingleSection>\n")
        assert spec.root == before

    def test_repr(self) -> None:
        assert "meta_sections=['dummy']" in repr(compile_spec(FULL_SPEC))


# ###############
# Compilation Errors
# ###############


class TestCompileErrors:
    def test_syntax_error_is_wrapped(self) -> None:
        with pytest.raises(SpecCompileError) as exc_info:
            compile_spec("<SingleSection a>\n  SingleDirective x /a/\n")
        err = exc_info.value
        assert isinstance(err.cause, ConfigSyntaxError)
        assert str(err).startswith("Invalid grammar specification:")

    def test_unknown_keyword(self) -> None:
        with pytest.raises(SpecCompileError) as exc_info:
            compile_spec("SingleDirectiv user /a/\n")
        assert isinstance(exc_info.value.cause, UnknownElementError)
        assert exc_info.value.line == 1

    def test_directive_declaration_without_pattern(self) -> None:
        with pytest.raises(SpecCompileError, match="too few arguments"):
            compile_spec("SingleDirective user\n")

    def test_required_directives_declared_twice(self) -> None:
        with pytest.raises(SpecCompileError) as exc_info:
            compile_spec("SingleDirective a /a/\nRequiredDirectives a\nRequiredDirectives a\n")
        assert isinstance(exc_info.value.cause, MultiplicityError)

    def test_meta_section_directive_needs_regex_pattern(self) -> None:
        # Inside a MetaSection the first pattern must be a regular expression.
        with pytest.raises(SpecCompileError, match="invalid argument"):
            compile_spec("<MetaSection m>\n  SingleDirective x optional /a/\n</MetaSection>\n")

    def test_dangling_reference(self) -> None:
        with pytest.raises(SpecCompileError, match="MetaSection for reference undeclared not found"):
            compile_spec("NamedSectionRef section undeclared\n")

    def test_nested_meta_section_is_rejected(self) -> None:
        source = "<SingleSection a>\n  <MetaSection m>\n    SingleDirective x /a/\n  </MetaSection>\n</SingleSection>\n"
        with pytest.raises(SpecCompileError):
            compile_spec(source)

    def test_bad_pattern(self) -> None:
        with pytest.raises(SpecCompileError, match="not a valid regular expression"):
            compile_spec("SingleDirective x /[unclosed/\n")


# ###############
# Loading Files
# ###############


class TestLoadSpec:
    def test_load_spec(self, tmp_path: Path) -> None:
        path = tmp_path / "app.spec"
        path.write_text(FULL_SPEC, encoding="utf-8")
        assert "dummy" in load_spec(path).meta_sections

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecCompileError, match="Cannot read spec file"):
            load_spec(tmp_path / "missing.spec")

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "app.conf"
        path.write_text("user max\n", encoding="utf-8")
        spec = compile_spec("SingleDirective user /\\w+/\n")
        assert spec.parse_file(path).children[0].arguments == ["max"]

    def test_file_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "app.spec"
        path.write_bytes(b"# \xff\xfe\n")
        with pytest.raises(SpecCompileError, match="Cannot read spec file"):
            load_spec(path)

    def test_parse_file_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "app.conf"
        path.write_bytes(b"user \xff\n")
        spec = compile_spec("SingleDirective user /\\w+/\n")
        with pytest.raises(UnicodeDecodeError):
            spec.parse_file(path)

    def test_spec_nested_deeper_than_the_recursion_limit(self) -> None:
        depth = sys.getrecursionlimit() + 100
        spec = compile_spec("<NamedSection s>\n" * depth + "SingleDirective x /a/\n" + "</NamedSection>\n" * depth)
        config = "".join(f"<s a{i}>\n" for i in range(depth)) + "x a\n" + "</s>\n" * depth
        assert spec.parse(config).count_elements("s") == 1
