import pytest

from recordkit.core.record import BaseRecord
from recordkit.exceptions import IncorrectUsageError, MethodNotFoundError
from recordkit.fields import String
from recordkit.utils.accessors import AccessorSource
from recordkit.utils.reflection import accessors


class Greeter:
    def greet(self):
        return f"Hello, {self.get_name()}!"


class Member(Greeter, BaseRecord):
    name = String()


class TestUnregisteredMethods:
    def test_that_unknown_methods_raise_method_not_found(self):
        member = Member(name="Alice")

        with pytest.raises(MethodNotFoundError) as exc:
            member.set_nickname("Al")

        assert exc.value.args[0] == (
            "`Member` has no registered method or field `set_nickname`"
        )

    def test_that_method_not_found_is_an_attribute_error(self):
        member = Member(name="Alice")

        assert not hasattr(member, "set_nickname")
        assert getattr(member, "set_nickname", None) is None

    def test_that_invoke_only_calls_registered_methods(self):
        member = Member(name="Alice")

        assert member.invoke("get_name") == "Alice"

        with pytest.raises(MethodNotFoundError):
            member.invoke("_write", "name", "Bob")

        with pytest.raises(MethodNotFoundError):
            member.invoke("set_nickname", "Al")


class TestMixinMethods:
    def test_that_mixin_methods_are_part_of_the_accessor_table(self):
        assert accessors(Member)["greet"].source is AccessorSource.DECLARED

    def test_that_mixin_methods_can_use_generated_accessors(self):
        assert Member(name="Alice").invoke("greet") == "Hello, Alice!"


class TestLateRegistration:
    def test_that_methods_attached_after_creation_are_not_lost(self):
        class Guest(BaseRecord):
            name = String()

        def welcome(self):
            return f"Welcome, {self.get_name()}"

        Guest.welcome = welcome

        guest = Guest(name="Bob")
        assert accessors(Guest)["welcome"].source is AccessorSource.REGISTERED
        assert guest.invoke("welcome") == "Welcome, Bob"

    def test_register_method_as_decorator_with_name(self):
        class Guest(BaseRecord):
            name = String()

        @Guest.register_method(name="shout")
        def _shout(self):
            return self.get_name().upper()

        assert Guest(name="bob").invoke("shout") == "BOB"

    def test_that_late_registration_is_visible_on_existing_subclasses(self):
        class Guest(BaseRecord):
            name = String()

        class VipGuest(Guest):
            level = String()

        Guest.register_method(lambda self: "wave", name="wave")

        assert VipGuest(name="Carol").invoke("wave") == "wave"

    def test_that_private_names_cannot_be_registered(self):
        class Guest(BaseRecord):
            name = String()

        with pytest.raises(IncorrectUsageError):
            Guest.register_method(lambda self: None, name="_hidden")

    def test_that_fields_cannot_be_added_after_creation(self):
        class Guest(BaseRecord):
            name = String()

        with pytest.raises(IncorrectUsageError):
            Guest.email = String()

    def test_that_deleted_methods_leave_the_table(self):
        class Guest(BaseRecord):
            name = String()

        Guest.register_method(lambda self: "hi", name="hello")
        del Guest.hello

        assert "hello" not in accessors(Guest)
        with pytest.raises(MethodNotFoundError):
            Guest(name="Dan").invoke("hello")


class TestAccessorCollisions:
    def test_that_colliding_generated_accessors_are_rejected(self):
        from recordkit.fields import Embedded

        class Name(BaseRecord):
            name = String()

        with pytest.raises(IncorrectUsageError) as exc:

            class Badge(BaseRecord):
                name = String()
                owner = Embedded(Name, delegate=True)

        assert "get_name" in exc.value.args[0]

    def test_that_delegates_colliding_with_inherited_accessors_are_rejected(self):
        from recordkit.fields import Embedded
        from recordkit.people import Person

        class Alias(BaseRecord):
            given_name = String()

        with pytest.raises(IncorrectUsageError) as exc:

            class Member(Person):
                alias = Embedded(Alias, delegate=True)

        assert exc.value.args[0] == (
            "Accessor `get_given_name` of `Member` is generated for both "
            "`given_name` and `alias`"
        )

    def test_that_prefixed_delegates_avoid_inherited_accessors(self):
        from recordkit.fields import Embedded
        from recordkit.people import Person

        class Alias(BaseRecord):
            given_name = String()

        class Member(Person):
            alias = Embedded(Alias, delegate="alias")

        member = Member(given_name="Alice", alias={"given_name": "Ally"})

        assert member.get_given_name() == "Alice"
        assert member.get_alias_given_name() == "Ally"
