import pytest

from recordkit import Catalog
from recordkit.core.record import BaseRecord
from recordkit.exceptions import (
    ConfigurationError,
    IncorrectUsageError,
    ObjectNotFoundError,
)
from recordkit.fields import String


class Pet(BaseRecord):
    name = String()


class TestRecordDecorator:
    def test_that_plain_classes_are_derived_from_base_record(self, catalog):
        @catalog.record
        class Address:
            street_name = String()

            def one_line(self):
                return f"{self.street_name}"

        assert issubclass(Address, BaseRecord)
        address = Address(street_name="Main St")
        assert address.get_street_name() == "Main St"
        assert address.one_line() == "Main St"

    def test_decorator_with_options(self, catalog):
        @catalog.record(encapsulated=False, label="Postal Address")
        class Address:
            street_name = String()

        address = Address()
        address.street_name = "Main St"

        assert address.get_street_name() == "Main St"
        assert address.describe().startswith("Postal Address\n")

    def test_that_unknown_options_are_rejected(self, catalog):
        with pytest.raises(ConfigurationError):

            @catalog.record(persistent=True)
            class Address:
                street_name = String()

    def test_that_meta_options_of_plain_classes_are_kept(self, catalog):
        @catalog.record(label="Tag")
        class Tag:
            text = String()
            internal = String()

            class Meta:
                accessors = ["text"]

        assert Tag.meta_.label == "Tag"
        assert Tag.meta_.accessors == ["text"]


class TestRegister:
    def test_that_record_classes_are_registered_as_is(self, catalog):
        assert catalog.register(Pet) is Pet
        assert catalog.get("Pet") is Pet
        assert catalog.records == {"Pet": Pet}

    def test_that_registering_with_options_derives_a_subclass(self, catalog):
        OpenPet = catalog.register(Pet, encapsulated=False)

        assert OpenPet is not Pet
        assert issubclass(OpenPet, Pet)
        assert OpenPet.meta_.encapsulated is False
        assert Pet.meta_.encapsulated is True

    def test_that_registering_the_same_class_twice_is_allowed(self, catalog):
        catalog.register(Pet)
        catalog.register(Pet)

        assert list(catalog.records) == ["Pet"]

    def test_that_different_classes_cannot_share_a_name(self, catalog):
        catalog.register(Pet)

        with pytest.raises(IncorrectUsageError):
            catalog.declare("Pet", {"name": "string"})


class TestLookup:
    def test_unknown_record(self, catalog):
        with pytest.raises(ObjectNotFoundError) as exc:
            catalog.get("Unicorn")

        assert exc.value.args[0] == "Record `Unicorn` is not registered in catalog `Test`"

    def test_repr(self, catalog):
        catalog.register(Pet)

        assert repr(catalog) == "<Catalog 'Test': 1 record(s)>"


class TestCatalogConfig:
    def test_defaults(self):
        catalog = Catalog()

        assert catalog.sanitize_strings is True
        assert catalog.accessors is True
        assert catalog.config["describe"] == {
            "labels": "humanized",
            "missing": "<not set>",
        }

    def test_config_attributes(self, catalog):
        catalog.sanitize_strings = False

        assert catalog.config["sanitize_strings"] is False

        Memo = catalog.declare("Memo", {"body": "text"})

        assert Memo(body="<i>hi</i>").get_body() == "<i>hi</i>"

    def test_invalid_configuration(self):
        with pytest.raises(ConfigurationError):
            Catalog("Broken", config={"describe": {"labels": "loud"}})

    def test_describe_with_configured_labels(self):
        catalog = Catalog(
            "Raw", config={"describe": {"labels": "raw", "missing": "n/a"}}
        )

        assert catalog.describe(Pet()) == "Pet\n  name: n/a"

    def test_show(self, catalog, capsys):
        catalog.show(Pet(name="Rex"))

        assert capsys.readouterr().out == "Pet\n  Name: Rex\n"
