from core.library import VariantRecord, extract_variants, parse_detail_page
from core.library.variants import (
    extract_default_command,
    launch_link,
    parse_variant_line,
)

from conftest import detail_page


def test_structured_line_parsed_with_multiword_input():
    rec = parse_variant_line("llava:7b 4.7GB 32K Text, Image")
    assert rec == VariantRecord("llava:7b", "4.7GB", "32K", "Text, Image")
    assert rec.structured


def test_unmatched_line_falls_back_to_name_only():
    rec = parse_variant_line("mistral:latest 4.1GB")
    assert rec == VariantRecord("mistral:latest 4.1GB", "", "", "")
    assert not rec.structured


def test_every_non_empty_line_yields_exactly_one_record():
    lines = [
        "mistral:7b 4.1GB 32K Text",
        "<span>mistral:latest</span>",
        "   ",
        "<b></b>",
        "mistral:instruct <span>4.1GB</span> <span>32K</span> <span>Text</span>",
        "weird-line",
    ]
    variants = extract_variants(detail_page(variants=lines))
    assert [v.variant_name for v in variants] == [
        "mistral:7b",
        "mistral:latest",
        "mistral:instruct",
        "weird-line",
    ]
    assert variants[2] == VariantRecord("mistral:instruct", "4.1GB", "32K", "Text")


def test_nested_list_inside_a_row_does_not_swallow_later_rows():
    text = (
        '<ul role="list">'
        "<li>a:7b <ul><li>tools</li></ul> 4GB 8K Text</li>"
        "<li>b:13b 8GB 8K Text</li>"
        "</ul>"
    )
    assert extract_variants(text) == [
        VariantRecord("a:7b", "4GB", "8K", "Text"),
        VariantRecord("b:13b", "8GB", "8K", "Text"),
    ]


def test_first_role_list_is_the_variant_container():
    text = (
        '<ul role="list"><li>phi3:mini 2.2GB 128K Text</li></ul>'
        '<ul role="list"><li>footer link</li></ul>'
    )
    assert [v.variant_name for v in extract_variants(text)] == ["phi3:mini"]


def test_missing_list_container_gives_no_variants():
    assert extract_variants("<html><ul><li>a b c d</li></ul></html>") == []


def test_default_command_extracted_and_runner_prefix_dropped():
    text = detail_page(command="ollama run mistral")
    assert extract_default_command(text, "mistral") == "run mistral"


def test_default_command_attribute_order_independent():
    text = '<input value="run llama2:13b" readonly name="command">'
    assert extract_default_command(text, "llama2") == "run llama2:13b"


def test_default_command_synthesized_when_absent():
    assert extract_default_command("<html></html>", "phi3") == "run phi3"
    assert extract_default_command(
        '<input name="search" value="x">', "phi3"
    ) == "run phi3"


def test_launch_link_encodes_spaces_and_colons():
    assert launch_link("run llama2:13b") == "ollama://run%20llama2%3A13b"
    assert launch_link("run phi3", prefix="x-run:") == "x-run:run%20phi3"


def test_parse_detail_page_combines_all_parts():
    page = parse_detail_page(
        "gemma",
        detail_page(variants=["gemma:2b 1.7GB 8K Text"]),
    )
    assert page.model_id == "gemma"
    assert page.default_command == "run gemma"
    assert page.launch_link == "ollama://run%20gemma"
    assert page.variants == [VariantRecord("gemma:2b", "1.7GB", "8K", "Text")]
