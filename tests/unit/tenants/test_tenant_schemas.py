"""Tests for tenant schemas."""

from barbershop_tenancy.modules.tenants import PlanType, Tenant, TenantSettings


class TestTenant:
    """Tests for Tenant parsing."""

    def test_camel_case_payload(self):
        tenant = Tenant.model_validate(
            {
                "id": "bb-1",
                "slug": "barbearia-alpha",
                "name": "Barbearia Alpha",
                "planType": "pro",
                "createdAt": "2024-01-15T10:00:00Z",
                "unknownField": "ignored",
            }
        )

        assert tenant.plan_type == PlanType.PRO
        assert tenant.created_at is not None
        assert not hasattr(tenant, "unknownField")

    def test_missing_plan_defaults_to_free(self):
        tenant = Tenant.model_validate(
            {"id": "bb-1", "slug": "abc", "name": "A", "planType": None}
        )
        assert tenant.plan_type == PlanType.FREE

    def test_settings_defaults_fill_gaps(self):
        tenant = Tenant.model_validate(
            {"id": "bb-1", "slug": "abc", "name": "A", "settings": {"theme": "dark"}}
        )

        assert tenant.settings.theme == "dark"
        assert tenant.settings.timezone == "America/Sao_Paulo"
        assert tenant.settings.working_hours["saturday"] == {
            "start": "09:00",
            "end": "16:00",
        }
        assert tenant.settings.working_hours["sunday"] == {
            "start": "10:00",
            "end": "14:00",
        }

    def test_null_settings_become_defaults(self):
        tenant = Tenant.model_validate(
            {"id": "bb-1", "slug": "abc", "name": "A", "settings": None}
        )
        assert tenant.settings.theme == "default"


class TestTenantSettings:
    """Tests for TenantSettings.merged."""

    def test_merged_keeps_unknown_keys(self):
        settings = TenantSettings.model_validate({"customBanner": "promo"})

        merged = settings.merged({"timezone": "America/Manaus"})

        assert merged.timezone == "America/Manaus"
        assert merged.model_extra == {"customBanner": "promo"}

    def test_default_working_hours_not_shared(self):
        first = TenantSettings()
        second = TenantSettings()

        first.working_hours["monday"]["start"] = "07:00"

        assert second.working_hours["monday"]["start"] == "09:00"
