import os

from tripbill.settings import Settings


def _clear_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TRIPBILL_"):
            monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_defaults(self, monkeypatch):
        _clear_env(monkeypatch)
        s = Settings(_env_file=None)
        assert s.brand_name == "Tripomaniac"
        assert s.brand_tagline == "Premium Travel Experiences"
        assert s.document_title == "Travel Invoice"
        assert len(s.footer_lines) == 2
        assert s.customer_id_prefix == "TM-"
        assert s.storage_backend == "local"
        assert s.storage_local_path == "./invoices"
        assert s.storage_prefix == "invoices"
        assert s.pdf_font_path == ""
        assert s.pdf_fallback_font_paths == []
        assert s.log_level == "INFO"
        assert s.log_json is False

    def test_env_override(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("TRIPBILL_BRAND_NAME", "Wanderly")
        monkeypatch.setenv("TRIPBILL_PDF_FONT_PATH", "/fonts/NotoSans-Regular.ttf")
        monkeypatch.setenv("TRIPBILL_LOG_JSON", "true")
        s = Settings(_env_file=None)
        assert s.brand_name == "Wanderly"
        assert s.pdf_font_path == "/fonts/NotoSans-Regular.ttf"
        assert s.log_json is True

    def test_fallback_fonts_from_json(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("TRIPBILL_PDF_FALLBACK_FONT_PATHS", '["/fonts/NotoSansDevanagari-Regular.ttf"]')
        s = Settings(_env_file=None)
        assert s.pdf_fallback_font_paths == ["/fonts/NotoSansDevanagari-Regular.ttf"]

    def test_footer_lines_from_json(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("TRIPBILL_FOOTER_LINES", '["Safe travels!"]')
        s = Settings(_env_file=None)
        assert s.footer_lines == ["Safe travels!"]
