"""Person and Address records

`Person` stores its year of birth and derives its age from it, `Address` is a
plain record, and `PersonWithAddress` owns an `Address` and exposes the
address accessors as its own::

    person = PersonWithAddress(given_name="Alice", family_name="Wonder")
    person.set_postal_address(Address())
    person.set_street_name("Main St")
    person.get_street_name()  # 'Main St'
"""

from recordkit.core.record import BaseRecord
from recordkit.fields import Embedded, Integer, String, computed
from recordkit.utils import current_year


class Person(BaseRecord):
    given_name = String(max_length=100)
    family_name = String(max_length=100)
    email_address = String(max_length=254)
    year_of_birth = Integer()

    @computed(field=Integer())
    def age(self):
        """Age in years, derived from the year of birth"""
        if self.year_of_birth is None:
            return None
        return current_year() - self.year_of_birth

    @age.setter
    def age(self, value):
        self.set_year_of_birth(None if value is None else current_year() - value)


class Address(BaseRecord):
    street_name = String()
    city_name = String()
    postal_code = String(max_length=20)
    country_name = String()


class PersonWithAddress(Person):
    postal_address = Embedded(Address, delegate=True)
