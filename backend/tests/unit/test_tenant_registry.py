"""Unit tests for tenant registry classification

Tests cover:
- Every application model is classified (TenantScoped or GlobalTable)
- The static TENANT_SCOPED_MODELS list matches the mixins
- Misconfigured models fail verification
"""

import pytest
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base

from models.base import Base, GlobalTable, TenantScoped, mapped_models
from tenancy.exceptions import RegistryMismatchError, UnclassifiedModelError
from tenancy.registry import (
    TENANT_SCOPED_MODELS,
    TenantRegistry,
    get_tenant_registry,
    verify_model_classification,
)


class TestApplicationRegistry:
    """Test the registry built from the application's models"""

    def test_registry_matches_static_list(self):
        registry = get_tenant_registry()

        assert registry.names == TENANT_SCOPED_MODELS

    def test_every_mapped_model_is_classified(self):
        for name, model in mapped_models(Base).items():
            assert issubclass(model, TenantScoped) != issubclass(model, GlobalTable), name

    @pytest.mark.parametrize("model_name", sorted(TENANT_SCOPED_MODELS))
    def test_scoped_models_have_tenant_column(self, model_name):
        model = get_tenant_registry().model_for(model_name)

        column = model.__table__.c.tenant_id
        assert column.nullable is False
        assert column.index is True
        assert {fk.target_fullname for fk in column.foreign_keys} == {"tenant.id"}

    @pytest.mark.parametrize("model_name", ["Tenant", "Permission", "UnitOfMeasure"])
    def test_global_models_are_not_scoped(self, model_name):
        registry = get_tenant_registry()

        assert registry.is_scoped(model_name) is False
        assert model_name not in registry
        assert "tenant_id" not in mapped_models(Base)[model_name].__table__.c

    def test_unknown_model_is_not_scoped(self):
        assert get_tenant_registry().is_scoped("Nonexistent") is False
        assert get_tenant_registry().is_scoped(None) is False


class TestVerifyModelClassification:
    """Test verification against a separate declarative base"""

    def test_valid_classification_returns_registry(self):
        TestBase = declarative_base()

        class Loaf(TenantScoped, TestBase):
            __tablename__ = "loaf"
            id = Column(String(36), primary_key=True)

        class Flour(GlobalTable, TestBase):
            __tablename__ = "flour"
            id = Column(String(36), primary_key=True)

        registry = verify_model_classification(TestBase, expected={"Loaf"})

        assert isinstance(registry, TenantRegistry)
        assert registry.names == frozenset({"Loaf"})
        assert registry.model_for("Loaf") is Loaf
        assert registry.model_for("Flour") is None

    def test_model_without_mixin_is_rejected(self):
        TestBase = declarative_base()

        class Crumb(TestBase):
            __tablename__ = "crumb"
            id = Column(String(36), primary_key=True)

        with pytest.raises(UnclassifiedModelError) as exc_info:
            verify_model_classification(TestBase, expected=set())

        assert exc_info.value.model_names == ["Crumb"]

    def test_model_with_both_mixins_is_rejected(self):
        TestBase = declarative_base()

        class Confused(TenantScoped, GlobalTable, TestBase):
            __tablename__ = "confused"
            id = Column(String(36), primary_key=True)

        with pytest.raises(UnclassifiedModelError):
            verify_model_classification(TestBase, expected={"Confused"})

    def test_scoped_model_missing_from_list_is_rejected(self):
        TestBase = declarative_base()

        class Baguette(TenantScoped, TestBase):
            __tablename__ = "baguette"
            id = Column(String(36), primary_key=True)

        with pytest.raises(RegistryMismatchError) as exc_info:
            verify_model_classification(TestBase, expected=set())

        assert exc_info.value.missing == {"Baguette"}
        assert exc_info.value.unexpected == set()

    def test_listed_model_without_mixin_is_rejected(self):
        TestBase = declarative_base()

        class Oven(GlobalTable, TestBase):
            __tablename__ = "oven"
            id = Column(String(36), primary_key=True)

        with pytest.raises(RegistryMismatchError) as exc_info:
            verify_model_classification(TestBase, expected={"Oven"})

        assert exc_info.value.unexpected == {"Oven"}
