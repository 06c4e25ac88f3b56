"""
Test environment settings for the integration layer
"""

from mystay_integrations.settings import IntegrationSettings


class TestIntegrationSettings:
    def test_empty_environment(self, make_settings):
        settings = make_settings()

        assert not settings.has_pms()
        assert not settings.has_payment()
        assert not settings.has_digital_key()
        assert not settings.has_spa()
        assert not settings.has_ocr()
        assert not settings.has_ai()
        assert settings.openai_model == "gpt-4"
        assert settings.hotel_name == "MyStay Hotel"

    def test_provider_ids_are_normalized(self, make_settings):
        settings = make_settings(pms_provider=" Opera ", spa_provider="   ", ocr_provider="AWS-Textract")

        assert settings.pms_provider == "opera"
        assert settings.spa_provider is None
        assert settings.ocr_provider == "aws-textract"

    def test_none_providers_do_not_count(self, make_settings):
        settings = make_settings(digital_key_provider="NONE", spa_provider="none")

        assert not settings.has_digital_key()
        assert not settings.has_spa()

    def test_amenities(self, make_settings):
        assert make_settings(hotel_amenities="Spa, Pool,, Gym ").amenities() == ["Spa", "Pool", "Gym"]
        assert make_settings().amenities() == []

    def test_configs_omit_blank_values(self, make_settings):
        settings = make_settings(
            pms_provider="opera",
            pms_base_url="https://opera.example.com",
            pms_resort_id="R1",
            pms_username="",
            ocr_api_key="k",
        )

        assert settings.pms_config() == {"baseUrl": "https://opera.example.com", "resortId": "R1"}
        assert settings.ocr_config() == {"apiKey": "k"}
        assert settings.payment_config() == {}

    def test_ai_config(self, make_settings):
        settings = make_settings(openai_api_key="sk", hotel_location="Lyon", hotel_amenities="Spa")

        assert settings.ai_config() == {
            "apiKey": "sk",
            "model": "gpt-4",
            "hotelName": "MyStay Hotel",
            "hotelLocation": "Lyon",
            "hotelAmenities": ["Spa"],
        }

    def test_reads_process_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("PMS_PROVIDER", "Cloudbeds")
        monkeypatch.setenv("pms_property_id", "PROP-9")

        settings = IntegrationSettings(_env_file=None)

        assert settings.pms_provider == "cloudbeds"
        assert settings.pms_config() == {"propertyId": "PROP-9"}

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("STRIPE_SECRET_KEY=sk_from_file\nUNRELATED=1\n", encoding="utf-8")

        settings = IntegrationSettings()

        assert settings.has_payment()
        assert settings.payment_config() == {"stripeSecretKey": "sk_from_file"}
