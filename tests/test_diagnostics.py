import logging

from artifact_updater.agents.analysis.diagnostics import (
    INVALID_HTML,
    NO_BODY,
    NO_KEYWORDS,
    UNKNOWN_METHOD,
    VERY_LARGE,
    VERY_SMALL,
    diagnose_html_update,
    log_diagnostics,
)


class TestDiagnostics:

    def test_invalid_and_tiny_content(self):
        result = diagnose_html_update("plain text", "make it pop")

        assert INVALID_HTML in result.potential_issues
        assert VERY_SMALL in result.potential_issues
        assert NO_BODY in result.potential_issues
        assert UNKNOWN_METHOD in result.potential_issues
        assert NO_KEYWORDS in result.potential_issues
        assert "Use string-based or regex-based updates instead of DOM operations" in result.recommendations
        assert "Be more specific in your update request" in result.recommendations

    def test_very_large_content(self):
        content = "<html><body>" + "<p>lorem ipsum</p>" * 8000 + "</body></html>"

        result = diagnose_html_update(content, "change the footer")

        assert VERY_LARGE in result.potential_issues
        assert "Consider breaking the update into smaller operations" in result.recommendations
        assert "Use regex-based updates for header/footer modifications" in result.recommendations

    def test_addition_with_body_recommends_template(self, sample_html):
        result = diagnose_html_update(sample_html, "Add a new contact section with a contact form")

        assert result.update_analysis.request_type == "addition"
        assert "Use template-based updates for adding new sections" in result.recommendations

    def test_generic_recommendation_when_nothing_fires(self, sample_html):
        content = sample_html + "<!--" + "x" * 6000 + "-->"

        result = diagnose_html_update(content, "reorganize the layout")

        assert result.recommendations == ["Try using template method for this type of update"]

    def test_log_diagnostics(self, sample_html, caplog):
        result = diagnose_html_update(sample_html, "change the footer")

        with caplog.at_level(logging.INFO):
            log_diagnostics(result, "change the footer")

        assert "Recommended method: regex" in caplog.text
        assert "Recommendations:" in caplog.text
