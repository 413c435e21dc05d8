class FieldDescriptorMixin:
    """Provide basic implementation to treat the Field as a descriptor"""

    def __init__(self, *args, **kwargs):
        """Initialize common Field Attributes"""
        # These are set up when the owner (Record class) adds the field to itself
        self.field_name = None
        self._record_cls = None
        self.description = kwargs.pop("description", None)

    def __set_name__(self, record_cls, name):
        self.field_name = name

        # Record the Record class setting up the field
        self._record_cls = record_cls

    def __get__(self, instance, owner):
        """Placeholder for handling `getattr` operations on attributes"""
        raise NotImplementedError

    def __set__(self, instance, value):
        """Placeholder for handling `setattr` operations on attributes"""
        raise NotImplementedError

    def __delete__(self, instance):
        """Placeholder for handling `del` operations on attributes"""
        raise NotImplementedError
