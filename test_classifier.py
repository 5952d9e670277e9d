"""Tests for symbol loading, type normalization and item classification."""

import pytest
from apibump import (
    Classifier,
    EngineConfig,
    Item,
    ItemKind,
    RequiredBump,
    WarningCode,
    classify,
    load_symbol_table,
)
from apibump.differ import diff_snapshots
from apibump.exceptions import SymbolTableError
from apibump.normalizer import normalize_type, normalize_type_list
from apibump.symbols import Param, ResolvedSymbol, Signature, SymbolKind, TypeShape


def table(*symbols):
    return load_symbol_table({"module": "example.com/pkg", "symbols": list(symbols)})


class TestNormalizer:
    """Test type signature normalization."""

    def test_strips_parameter_name(self):
        assert normalize_type("ctx context.Context") == "context.Context"

    def test_bare_type(self):
        assert normalize_type("error") == "error"

    def test_param_object(self):
        assert normalize_type(Param(type_expr="var n int")) == "int"

    def test_structured_type_kept_whole(self):
        """Test a resolver-split {name, type} parameter keeps every token of its type."""
        assert normalize_type(Param(name="c", type="chan int")) == "chan int"
        assert normalize_type(Param(type="<-chan int")) == "<-chan int"

    def test_order_and_duplicates_preserved(self):
        assert normalize_type_list(["a int", "b string", "c int"]) == ["int", "string", "int"]

    def test_empty_input(self):
        assert normalize_type_list([]) == []

    def test_blank_descriptor(self):
        assert normalize_type("   ") == ""

    def test_best_effort_on_function_types(self):
        """Test a type containing spaces degrades to its last token."""
        assert normalize_type("fn func(x int) error") == "error"


class TestSymbolTable:
    """Test loading resolver dumps."""

    def test_load_function(self):
        symbols = table({
            "name": "F",
            "kind": "func",
            "signature": {
                "params": ["x int", {"name": "opts", "type": "[]Option"}],
                "results": ["error"],
                "variadic": True,
            },
        })
        assert symbols.module == "example.com/pkg"
        f = symbols.symbols[0]
        assert f.kind == SymbolKind.FUNC
        assert str(f.signature.params[0]) == "x int"
        assert (f.signature.params[1].name, f.signature.params[1].type) == ("opts", "[]Option")
        assert f.signature.variadic is True

    def test_load_struct(self):
        symbols = table({
            "name": "T",
            "kind": "type",
            "type": "pkg.T",
            "underlying": {
                "shape": "struct",
                "fields": [{"name": "A", "type": "int"}],
                "methods": [{"name": "M", "signature": {"receiver": "*pkg.T"}}],
            },
        })
        t = symbols.symbols[0]
        assert t.underlying.shape == TypeShape.STRUCT
        assert t.underlying.fields[0].type == "int"
        assert t.underlying.methods[0].signature.receiver == "*pkg.T"

    def test_unknown_kind_is_kept(self):
        """Test an unknown kind survives loading so the classifier can warn."""
        symbols = table({"name": "X", "kind": "macro"})
        assert symbols.symbols[0].kind == SymbolKind.UNKNOWN
        assert symbols.symbols[0].kind_name == "macro"

    def test_exported_from_name(self):
        symbols = table({"name": "helper", "kind": "var", "type": "int"},
                        {"name": "Public", "kind": "var", "type": "int"})
        assert [s.name for s in symbols.exported()] == ["Public"]

    def test_missing_name(self):
        with pytest.raises(SymbolTableError):
            table({"kind": "func"})

    def test_type_without_underlying(self):
        with pytest.raises(SymbolTableError):
            table({"name": "T", "kind": "type"})

    def test_invalid_param(self):
        with pytest.raises(SymbolTableError):
            table({"name": "F", "kind": "func", "signature": {"params": [42]}})

    def test_non_string_field_name(self):
        """Test a field name YAML read as a boolean is rejected."""
        with pytest.raises(SymbolTableError):
            table({"name": "T", "kind": "type",
                   "underlying": {"shape": "struct", "fields": [{"name": True, "type": "int"}]}})

    def test_non_string_method_name(self):
        with pytest.raises(SymbolTableError):
            table({"name": "I", "kind": "type",
                   "underlying": {"shape": "interface", "methods": [{"name": False}]}})

    def test_not_a_mapping(self):
        with pytest.raises(SymbolTableError):
            load_symbol_table(["F"])


class TestClassifier:
    """Test item classification."""

    def setup_method(self):
        self.classifier = Classifier()

    def test_function(self):
        result = self.classifier.classify(table({
            "name": "Open",
            "kind": "func",
            "signature": {"params": ["name string", "flags ...int"], "results": ["*File", "error"],
                          "variadic": True},
        }))
        item = result.snapshot["Open"]
        assert item == Item.function(["string", "...int"], ["*File", "error"], variadic=True)
        assert item.func.receiver is None

    def test_variable_and_constant(self):
        result = self.classifier.classify(table(
            {"name": "Debug", "kind": "var", "type": "bool"},
            {"name": "Version", "kind": "const", "type": "untyped string"},
        ))
        assert result.snapshot["Debug"] == Item.variable("bool")
        assert result.snapshot["Version"].kind == ItemKind.CONST
        assert result.snapshot["Version"].type == "untyped string"

    def test_struct_fields_and_method_set(self):
        result = self.classifier.classify(table({
            "name": "Server",
            "kind": "type",
            "type": "example.com/pkg.Server",
            "underlying": {
                "shape": "struct",
                "fields": [
                    {"name": "Addr", "type": "string"},
                    {"name": "mu", "type": "sync.Mutex"},
                ],
                "methods": [
                    {"name": "Serve", "signature": {"params": ["l net.Listener"], "results": ["error"],
                                                    "receiver": "*example.com/pkg.Server"}},
                    {"name": "Lock", "signature": {"receiver": "*example.com/pkg.Server"}},
                    {"name": "init", "signature": {"receiver": "*example.com/pkg.Server"}},
                ],
            },
        }))
        item = result.snapshot["Server"]
        assert item.kind == ItemKind.STRUCT
        assert item.type == "example.com/pkg.Server"
        assert set(item.composite.fields) == {"Addr"}
        assert set(item.composite.methods) == {"Serve", "Lock"}
        assert item.composite.methods["Serve"].func.receiver == "*example.com/pkg.Server"
        assert result.warnings == []

    def test_interface_method_set(self):
        result = self.classifier.classify(table({
            "name": "Reader",
            "kind": "type",
            "type": "io.Reader",
            "underlying": {
                "shape": "interface",
                "methods": [{"name": "Read", "signature": {"params": ["p []byte"],
                                                           "results": ["n int", "err error"]}}],
            },
        }))
        item = result.snapshot["Reader"]
        assert item.kind == ItemKind.INTERFACE
        assert item.composite.fields == {}
        assert item.composite.methods["Read"].func.res_types == ["int", "error"]

    def test_unsupported_underlying_type(self):
        """Test a named non-record type is skipped with a warning."""
        result = self.classifier.classify(table(
            {"name": "Duration", "kind": "type", "underlying": {"shape": "basic"}},
            {"name": "F", "kind": "func"},
        ))
        assert "Duration" not in result.snapshot
        assert "F" in result.snapshot
        assert result.warnings[0].name == "Duration"
        assert result.warnings[0].code == WarningCode.UNSUPPORTED_TYPE
        assert "basic" in result.warnings[0].message

    def test_unsupported_symbol_kinds(self):
        result = self.classifier.classify(table(
            {"name": "Loop", "kind": "label"},
            {"name": "Fmt", "kind": "pkgname"},
            {"name": "Len", "kind": "builtin"},
            {"name": "Nil", "kind": "nil"},
            {"name": "X", "kind": "macro"},
        ))
        assert result.snapshot == {}
        assert [w.name for w in result.warnings] == ["Loop", "Fmt", "Len", "Nil", "X"]
        assert all(w.code == WarningCode.UNSUPPORTED_SYMBOL for w in result.warnings)

    def test_unexported_symbols_skipped_silently(self):
        result = self.classifier.classify(table({"name": "helper", "kind": "func"}))
        assert result.snapshot == {}
        assert result.warnings == []

    def test_explicit_exported_flag(self):
        result = self.classifier.classify(table({"name": "_Ok", "kind": "var", "type": "int",
                                                 "exported": True}))
        assert "_Ok" in result.snapshot

    def test_warn_unexported_members(self):
        classifier = Classifier(EngineConfig(warn_unexported_members=True))
        result = classifier.classify(table({
            "name": "T",
            "kind": "type",
            "underlying": {"shape": "struct", "fields": [{"name": "x", "type": "int"}]},
        }))
        assert result.snapshot["T"].composite.fields == {}
        assert result.warnings[0].name == "T.x"
        assert result.warnings[0].code == WarningCode.UNEXPORTED_MEMBER

    def test_warnings_reset_between_runs(self):
        self.classifier.classify(table({"name": "L", "kind": "label"}))
        result = self.classifier.classify(table({"name": "F", "kind": "func"}))
        assert result.warnings == []

    def test_accepts_symbol_iterable(self):
        symbols = [ResolvedSymbol(name="F", kind=SymbolKind.FUNC,
                                  signature=Signature(params=[Param("x int")]))]
        assert classify(symbols).snapshot["F"].func.arg_types == ["int"]


class TestClassifyAndDiff:
    """Test snapshots built from resolver dumps compare as expected."""

    def func_snapshot(self, *params):
        return classify(table({"name": "F", "kind": "func", "signature": {"params": list(params)}})).snapshot

    def test_parameter_rename_is_patch(self):
        bump, findings = diff_snapshots(self.func_snapshot("x int"), self.func_snapshot("y int"))
        assert bump == RequiredBump.PATCH
        assert findings == []

    def test_structured_parameter_rename_is_patch(self):
        old = self.func_snapshot({"name": "x", "type": "int"})
        new = self.func_snapshot({"name": "y", "type": "int"})
        assert diff_snapshots(old, new)[0] == RequiredBump.PATCH

    def test_structured_channel_to_plain_type_is_major(self):
        old = self.func_snapshot({"name": "c", "type": "chan int"})
        new = self.func_snapshot({"name": "c", "type": "int"})
        bump, findings = diff_snapshots(old, new)
        assert bump == RequiredBump.MAJOR
        assert findings[0].message == "Parameter 0 type changed: chan int -> int"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
