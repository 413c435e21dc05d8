import pytest

from recordkit.core.record import BaseRecord
from recordkit.exceptions import InvalidDataError, NotSupportedError, ValidationError

from .elements import AbstractShape, Book, Circle, Counter


class TestRecordInitialization:
    def test_that_base_record_class_cannot_be_instantiated(self):
        with pytest.raises(NotSupportedError):
            BaseRecord()

    def test_that_a_record_is_created_empty(self):
        book = Book(title="Dune")

        assert book.author is None
        assert book.pages is None

    def test_that_a_record_can_be_created_all_at_once(self):
        book = Book(title="Dune", author="Frank Herbert", pages=412)

        assert book.to_dict() == {
            "title": "Dune",
            "author": "Frank Herbert",
            "pages": 412,
        }

    def test_that_a_template_dict_provides_initial_values(self):
        book = Book({"title": "Dune", "pages": 412}, author="Frank Herbert")

        assert book.title == "Dune"
        assert book.author == "Frank Herbert"

    def test_that_keyword_arguments_override_template_values(self):
        book = Book({"title": "Dune"}, title="Children of Dune")

        assert book.title == "Children of Dune"

    def test_that_template_must_be_a_dict(self):
        with pytest.raises(AssertionError):
            Book(["title", "Dune"])

    def test_that_defaults_are_applied(self):
        assert Counter().count == 0

    def test_that_values_are_cast_to_field_types(self):
        book = Book(title="Dune", pages="412")

        assert book.pages == 412

    def test_that_all_validation_errors_are_collected(self):
        with pytest.raises(ValidationError) as exc:
            Book(pages="many")

        assert exc.value.messages == {
            "title": ["is required"],
            "pages": ['"many" value must be an integer.'],
        }

    def test_that_unknown_fields_are_rejected(self):
        with pytest.raises(InvalidDataError) as exc:
            Book(title="Dune", isbn="978-0441013593")

        assert exc.value.messages == {"isbn": ["is invalid"]}


class TestAbstractRecords:
    def test_that_abstract_records_cannot_be_instantiated(self):
        with pytest.raises(NotSupportedError) as exc:
            AbstractShape(name="shape")

        assert (
            exc.value.args[0]
            == "AbstractShape class has been marked abstract and cannot be instantiated"
        )

    def test_that_abstract_option_is_not_inherited(self):
        circle = Circle(name="circle", radius=1.5)

        assert circle.get_name() == "circle"
        assert circle.get_radius() == 1.5


class TestRecordEquality:
    def test_that_records_with_equal_data_are_equal(self):
        assert Book(title="Dune") == Book(title="Dune")

    def test_that_records_of_different_types_are_not_equal(self):
        assert Book(title="Dune") != Counter()

    def test_that_records_are_not_hashable(self):
        with pytest.raises(TypeError):
            hash(Book(title="Dune"))

    def test_repr(self):
        book = Book(title="Dune")

        assert repr(book) == (
            "<Book: Book object ({'title': 'Dune', 'author': None, 'pages': None})>"
        )
