import asyncio
from unittest.mock import patch

import pytest

from artifact_updater.agents.update import smart_updater
from artifact_updater.agents.update.progress import ListProgressSink
from artifact_updater.agents.update.smart_updater import SmartUpdater, apply_operation
from artifact_updater.core.models import Document, UpdateOperation


def op(**kwargs):
    return UpdateOperation(**kwargs)


class TestApplyOperation:

    def test_replace_first_occurrence(self):
        content = "<p>a</p><p>a</p>"

        assert apply_operation(content, op(method="replace", target="<p>a</p>", content="<p>b</p>")) == "<p>b</p><p>a</p>"

    def test_replace_missing_target_is_noop(self):
        assert apply_operation("<p>a</p>", op(method="replace", target="<div>", content="x")) == "<p>a</p>"

    def test_remove(self):
        assert apply_operation("<p>a</p><hr><p>b</p>", op(method="remove", target="<hr>")) == "<p>a</p><p>b</p>"

    @pytest.mark.parametrize("position, expected", [
        ("before", "<hr><p>a</p><p>b</p>"),
        ("after", "<p>a</p><hr><p>b</p>"),
        (None, "<p>a</p><hr><p>b</p>"),
        ("replace", "<hr><p>b</p>"),
    ])
    def test_insert_positions(self, position, expected):
        operation = op(method="insert", target="<p>a</p>", content="<hr>", position=position)

        assert apply_operation("<p>a</p><p>b</p>", operation) == expected

    def test_insert_missing_target_is_noop(self):
        operation = op(method="insert", target="<aside>", content="<hr>", position="after")

        assert apply_operation("<p>a</p>", operation) == "<p>a</p>"

    def test_insert_inside_appends_to_element(self):
        content = '<div class="box"><p>a</p></div><div><p>c</p></div>'
        operation = op(method="insert", target='<div class="box">', content="<p>b</p>", position="inside")

        assert apply_operation(content, operation) == '<div class="box"><p>a</p><p>b</p></div><div><p>c</p></div>'

    def test_insert_inside_uses_the_matching_close_of_nested_elements(self):
        content = '<div id="outer"><div><p>a</p></div></div>'
        operation = op(method="insert", target='<div id="outer">', content="<p>b</p>", position="inside")

        assert apply_operation(content, operation) == '<div id="outer"><div><p>a</p></div><p>b</p></div>'

    def test_insert_inside_keeps_surrounding_markup_byte_identical(self):
        before = '<head><meta charset="UTF-8"></head>\n    <p>a&nbsp;b&copy;</p>\n'
        content = before + '<ul id="m"><li>a</li></ul>\n  <br>'
        operation = op(method="insert", target='<ul id="m">', content="<li>b</li>", position="inside")

        result = apply_operation(content, operation)

        assert result == before + '<ul id="m"><li>a</li><li>b</li></ul>\n  <br>'

    def test_insert_inside_falls_back_to_closing_tag_search(self):
        content = '<ul id="menu"><li>a</li></ul>'
        operation = op(method="insert", target='<ul id="menu">', content="<li>b</li>", position="inside")

        with patch.object(smart_updater, "find_element_for_opening_tag", return_value=None):
            result = apply_operation(content, operation)

        assert result == '<ul id="menu"><li>a</li><li>b</li></ul>'

    def test_insert_without_content_raises(self):
        with pytest.raises(ValueError):
            apply_operation("<p>a</p>", op(method="insert", target="<p>a</p>"))

    def test_modify_sets_inner_html_of_matches(self):
        content = '<div class="card"><p>old</p></div><p>keep</p>'
        operation = op(method="modify", target=".card p", content="new <b>text</b>")

        assert apply_operation(content, operation) == '<div class="card"><p>new <b>text</b></p></div><p>keep</p>'

    def test_modify_keeps_everything_outside_the_element(self, sample_html):
        operation = op(method="modify", target="section#home p", content="Fresh &amp; new")

        result = apply_operation(sample_html, operation)

        assert result == sample_html.replace("This is the home section content.", "Fresh &amp; new")

    def test_modify_every_match(self):
        content = '<li class="i">a</li>\n<li class="i">b</li>'

        result = apply_operation(content, op(method="modify", target="li.i", content="x"))

        assert result == '<li class="i">x</li>\n<li class="i">x</li>'

    def test_modify_nested_matches_replaces_outermost(self):
        content = '<div class="x"><div class="x">in</div></div><p>after</p>'

        result = apply_operation(content, op(method="modify", target=".x", content="N"))

        assert result == '<div class="x">N</div><p>after</p>'

    def test_modify_void_element_is_skipped(self):
        content = '<img src="a.png"><p>a</p>'

        assert apply_operation(content, op(method="modify", target="img", content="x")) == content

    def test_modify_without_match_is_noop(self):
        content = "<p>a</p>"

        assert apply_operation(content, op(method="modify", target=".missing", content="x")) == content

    def test_modify_invalid_selector_falls_back_to_literal_replace(self):
        content = "<p>price: div[ old</p>"

        result = apply_operation(content, op(method="modify", target="div[", content="NEW"))

        assert result == "<p>price: NEW old</p>"


class TestSmartUpdater:

    def setup_method(self):
        self.sink = ListProgressSink()

    def run_smart(self, generator, content, description="smart update: edit"):
        updater = SmartUpdater(generator=generator, sink=self.sink)
        return asyncio.run(updater.update(Document(content=content), description)), updater

    def test_failing_operation_does_not_stop_the_batch(self, fake_generator):
        generator = fake_generator({"SmartOperations": {"operations": [
            {"method": "insert", "target": "<p>a</p>", "position": "after"},
            {"method": "replace", "target": "<p>a</p>", "content": "<p>z</p>"},
        ]}})

        result, _ = self.run_smart(generator, "<p>a</p>")

        assert result == "<p>z</p>"
        assert [e.success for e in self.sink.of_type("operation-applied")] == [False, True]

    def test_operations_apply_sequentially(self, fake_generator):
        generator = fake_generator({"SmartOperations": {"operations": [
            {"method": "replace", "target": "one", "content": "two"},
            {"method": "replace", "target": "two", "content": "three"},
        ]}})

        result, _ = self.run_smart(generator, "<p>one</p>")

        assert result == "<p>three</p>"

    def test_missing_target_is_reported_as_not_applied(self, fake_generator):
        generator = fake_generator({"SmartOperations": {"operations": [
            {"method": "replace", "target": "<aside>", "content": "x"},
            {"method": "modify", "target": ".missing", "content": "x"},
        ]}})

        result, updater = self.run_smart(generator, "<p>a</p>")

        assert result == "<p>a</p>"
        assert [e.success for e in self.sink.of_type("operation-applied")] == [False, False]
        assert updater.applied == 0
