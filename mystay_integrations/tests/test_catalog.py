"""
Test the provider catalog
"""

import pytest

from mystay_integrations.catalog import (
    PERSISTED_DOMAINS,
    ProviderCatalog,
    config_template,
    default_provider,
    get_catalog,
    is_valid_provider,
    list_providers,
)


class TestProviderCatalog:
    """Valid provider ids, defaults and templates per domain"""

    def test_persisted_domain_providers(self):
        assert list_providers("pms") == ["mock", "opera", "mews", "cloudbeds"]
        assert list_providers("digitalKey") == ["none", "alliants", "openkey"]
        assert list_providers("spa") == ["none", "spabooker", "mindbody", "generic"]

    def test_connector_level_domains(self):
        assert set(list_providers("ocr")) == {"mock", "aws-textract", "google-vision", "azure-vision"}
        assert list_providers("payment") == ["stripe"]
        assert list_providers("aiConcierge") == ["openai"]

    def test_defaults(self):
        assert default_provider("pms") == "mock"
        assert default_provider("digitalKey") == "none"
        assert default_provider("spa") == "none"
        assert default_provider("unknown") is None

    @pytest.mark.parametrize("provider", [None, 42, "", "OPERA", "protel"])
    def test_invalid_providers(self, provider):
        assert is_valid_provider("pms", provider) is False

    def test_provider_of_other_domain_is_invalid(self):
        assert is_valid_provider("pms", "alliants") is False
        assert is_valid_provider("digitalKey", "alliants") is True

    def test_template_is_a_copy(self):
        template = config_template("pms", "opera")
        assert set(template) == {"baseUrl", "resortId", "username", "password"}

        template["resortId"] = "CHANGED"
        assert config_template("pms", "opera")["resortId"] == "RESORT_CODE"

    def test_template_for_none_is_empty(self):
        assert config_template("spa", "none") == {}
        assert config_template("pms", "unknown") == {}

    def test_every_persisted_domain_is_catalogued(self):
        catalog = get_catalog()
        for domain in PERSISTED_DOMAINS:
            assert domain in catalog.list_domains()
            assert catalog.default_provider(domain) in catalog.list_providers(domain)

    def test_as_options(self):
        options = ProviderCatalog().as_options()

        assert options["pms"]["default"] == "mock"
        assert "opera" in options["pms"]["providers"]
        assert options["spa"]["templates"]["generic"]["customUrl"]

    def test_custom_catalog_file(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text(
            "domains:\n"
            "  pms:\n"
            "    default: opera\n"
            "    providers:\n"
            "      opera:\n"
            "        label: Opera\n"
            "        template: {resortId: X}\n"
        )
        catalog = ProviderCatalog(path)

        assert catalog.list_providers("pms") == ["opera"]
        assert catalog.label("pms", "opera") == "Opera"
        assert catalog.list_providers("spa") == []
