from recordkit.core.record import BaseRecord
from recordkit.fields import Embedded, Float, Integer, String, computed


class Book(BaseRecord):
    title = String(max_length=100, required=True)
    author = String()
    pages = Integer(min_value=1)


class Rectangle(BaseRecord):
    width = Float()
    height = Float()

    @computed(field=Float())
    def area(self):
        if self.width is None or self.height is None:
            return None
        return self.width * self.height

    @computed
    def is_square(self):
        return self.width == self.height


class Counter(BaseRecord):
    count = Integer(default=0)

    def increment(self):
        self.set_count(self.count + 1)
        return self

    def set_count(self, value):
        # Counters never go below zero
        self._write("count", max(value, 0))
        return self


class Note(BaseRecord):
    text = String()

    class Meta:
        encapsulated = False


class Tagged(BaseRecord):
    tag = String()
    internal = String()

    class Meta:
        accessors = ["tag"]


class Silent(BaseRecord):
    value = String()

    class Meta:
        accessors = False


class AbstractShape(BaseRecord):
    name = String()

    class Meta:
        abstract = True


class Circle(AbstractShape):
    radius = Float()


class Shelf(BaseRecord):
    label = String()
    book = Embedded(Book)


class Library(BaseRecord):
    name = String()
    main_book = Embedded(Book, delegate="main")
    spare_book = Embedded(Book, delegate="spare")
