import pytest

from gosymex.describer.extractor import extract, extract_nodes
from gosymex.describer.go_syntax import (
    ContractShape,
    FieldDecl,
    FuncDeclNode,
    ImportNode,
    OtherNode,
    OtherShape,
    ParamGroup,
    RecordShape,
    ResultGroup,
    TypeDeclNode,
)

from conftest import load_fixture


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"fmt"', "fmt"),
        ('"net/http"', "net/http"),
        ("`os`", "os"),
        ('"nonexistentpackage"', "nonexistentpackage"),
    ],
)
def test_import_quotes_are_stripped(raw, expected):
    report = extract_nodes([ImportNode(raw)], "test.go")
    assert report.imports == (expected,)


def test_duplicate_imports_are_kept_in_order():
    nodes = [ImportNode('"os"'), ImportNode('"fmt"'), ImportNode('"os"')]
    assert extract_nodes(nodes, "a.go").imports == ("os", "fmt", "os")


def test_struct_fields_in_declared_order():
    shape = RecordShape(fields=(FieldDecl(("A",), "int"), FieldDecl(("B",), "string")))
    report = extract_nodes([TypeDeclNode("T", shape)], "a.go")
    assert report.structs == {"T": ("A int", "B string")}


def test_embedded_fields_are_skipped_without_placeholder():
    shape = RecordShape(
        fields=(FieldDecl((), "Base"), FieldDecl(("Name",), "string"), FieldDecl((), "*io.Reader"))
    )
    report = extract_nodes([TypeDeclNode("T", shape)], "a.go")
    assert report.structs == {"T": ("Name string",)}


def test_struct_without_usable_fields_maps_to_empty_sequence():
    report = extract_nodes([TypeDeclNode("Empty", RecordShape())], "a.go")
    assert report.structs == {"Empty": ()}


def test_interface_methods_preserve_order():
    shape = ContractShape(methods=(FieldDecl(("M1",), "int"), FieldDecl(("M2",), "string")))
    report = extract_nodes([TypeDeclNode("T", shape)], "a.go")
    assert report.interfaces == {"T": ("M1 int", "M2 string")}


def test_interfaces_absent_without_contract_type():
    shape = RecordShape(fields=(FieldDecl(("A",), "int"),))
    report = extract_nodes([TypeDeclNode("T", shape)], "a.go")
    assert report.interfaces is None


def test_empty_interface_is_present_but_empty():
    report = extract_nodes([TypeDeclNode("Any", ContractShape())], "a.go")
    assert report.interfaces == {"Any": ()}


def test_other_shapes_produce_no_entry():
    report = extract_nodes([TypeDeclNode("Celsius", OtherShape("float64"))], "a.go")
    assert report.structs == {}
    assert report.interfaces is None


def test_funcs_keep_declaration_order_regardless_of_receiver():
    nodes = [
        FuncDeclNode(name="New", results=(ResultGroup(None, "*T"),)),
        OtherNode(kind="block"),
        FuncDeclNode(name="Run", receiver="*T", params=(ParamGroup(("n",), "int"),)),
        FuncDeclNode(name="helper"),
    ]
    report = extract_nodes(nodes, "a.go")
    assert report.funcs == ("New() returns (*T)", "(*T).Run(n int)", "helper()")


def test_unknown_node_variant_is_rejected():
    with pytest.raises(TypeError):
        extract_nodes([object()], "a.go")


def test_extract_sample_file(provider):
    report = extract(provider.parse(load_fixture("testfile.go")), "./test_files/testfile.go")

    assert report.file_path == "./test_files/testfile.go"
    assert report.imports == ("fmt", "net/http")
    assert report.structs == {"MyStruct": ("Field1 int", "Field2 string")}
    assert report.interfaces is None
    assert report.funcs == (
        "MyFunc(param1 int, param2 string) returns (result bool)",
        "main()",
    )


def test_extract_shapes_file(provider):
    report = extract(provider.parse(load_fixture("shapes.go")), "shapes.go")

    assert report.imports == ("context", "fmt", "io")
    assert report.interfaces == {
        "Shape": ("Area func() float64", "Scale func(factor float64) Shape"),
    }
    assert report.structs == {
        "Base": ("ID int", "Tags []string"),
        "Square": (
            "Side float64",
            "Meta map[string]interface{}",
            "Updates <-chan int",
            "Next *Square",
            "Handler func(context.Context, string) error",
        ),
        "Stack": ("items []T",),
    }
    assert report.funcs == (
        "(*Square).Area() returns (float64)",
        "(Square).Scale(factor float64) returns (Shape)",
        "(*Stack[T]).Push(v T)",
        "Sum(prefix string, values ...int) returns (total int, err error)",
        "Pair(a int, b int, name string) returns (int, string)",
        "Drain(ch chan<- struct{}, done chan bool)",
    )


def test_local_types_and_func_literals(provider):
    source = """package main

func outer() {
\ttype local struct{ X int }
\tf := func(a int) int { return a }
\t_ = f
}
"""
    report = extract(provider.parse(source), "main.go")
    assert report.structs == {"local": ("X int",)}
    assert report.funcs == ("outer()",)


def test_func_count_matches_declarations(provider):
    source = "package p\n\n" + "".join(f"func F{i}() {{}}\n" for i in range(7))
    report = extract(provider.parse(source), "p.go")
    assert report.funcs == tuple(f"F{i}()" for i in range(7))
