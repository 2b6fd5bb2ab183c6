"""
Wirebox Exceptions

Custom exception hierarchy for the wirebox DI container
"""

from typing import Optional, Sequence


class WireboxError(Exception):
    """
    Base exception for all wirebox errors.

    All wirebox-specific exceptions inherit from this class.
    You can catch this to handle any wirebox error generically.

    Example:
        >>> try:
        ...     service = container.get("app.user_service")
        ... except WireboxError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class NotFoundError(WireboxError, LookupError):
    """
    Raised when an identifier has no definition and cannot be auto-bound.

    This error is never wrapped by the container. It always reaches the
    caller as-is, so "missing" can be told apart from "broken".

    Common causes:
        - Typo in the identifier
        - Requesting an abstract class or protocol that has no binding
        - Auto-binding disabled with ``Container(autowire=False)``

    Solution:
        Register the identifier before requesting it::

            container.set(MailerInterface, SmtpMailer)
            mailer = container.get(MailerInterface)

    Note:
        The error message includes a list of registered identifiers
        to help identify available services.
    """

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier


class ContainerError(WireboxError):
    """
    Raised when a registered or auto-bound service cannot be constructed.

    ``get()`` wraps every failure except ``NotFoundError`` in a
    ``ContainerError`` carrying the identifier being resolved. The original
    exception is chained as ``__cause__``; use ``root_cause`` to reach
    the innermost one.

    Example::

        try:
            container.get("app.user_service")
        except ContainerError as e:
            print(e.identifier, type(e.root_cause).__name__)
    """

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier

    @property
    def root_cause(self) -> BaseException:
        """Innermost exception of the ``__cause__`` chain (self if none)."""
        error: BaseException = self
        while error.__cause__ is not None:
            error = error.__cause__
        return error


class InvalidDefinitionError(ContainerError):
    """
    Raised when a configuration record cannot describe a service.

    Common causes:
        - Record without ``type`` and without a callable ``factory``
        - ``type`` that is neither a class nor a class name

    Solution:
        Give the record a class or a callable factory::

            container.set("mailer", {"type": Mailer, "arguments": {"dsn": "mailer_dsn"}})
    """

    pass


class NotInstantiableError(ContainerError):
    """
    Raised when a definition names a class that cannot be constructed.

    Abstract base classes with unimplemented abstract methods and
    ``typing.Protocol`` classes fall into this category.

    Solution:
        Bind the abstraction to a concrete implementation::

            container.set(MailerInterface, SmtpMailer)
    """

    pass


class ClassLoadError(ContainerError):
    """
    Raised when a class name cannot be imported.

    Class names are dotted paths (``"package.module.ClassName"``). This error
    covers names that do not exist as well as modules that fail while
    being imported.
    """

    pass


class UnresolvableDependencyError(ContainerError):
    """
    Raised when a constructor or factory parameter cannot be satisfied.

    A parameter is unresolvable when it has no named override, its declared
    type is missing, builtin or unknown, it has no default value and it is not
    ``Optional``.

    Example::

        class Mailer:
            def __init__(self, dsn: str):  # needs an override
                ...

    Solution:
        Provide the value through a configuration record::

            container.set(Mailer, {"type": Mailer, "arguments": {"dsn": "smtp://localhost"}})
    """

    def __init__(self, message: str, parameter: str, owner: str):
        super().__init__(message)
        self.parameter = parameter
        self.owner = owner


class CircularDependencyError(ContainerError):
    """
    Raised when circular dependency is detected during resolution.

    This error occurs when service A depends on service B, and service B
    (directly or indirectly) depends on service A.

    Example of circular dependency::

        class ServiceA:
            def __init__(self, b: ServiceB): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Cycles that pass through several containers (a factory in one container
    calling ``get()`` on another) are detected too.

    Solution:
        1. Refactor to remove the circular dependency
        2. Extract common functionality to a third service
        3. Request the container (``ContainerInterface``) and resolve lazily
    """

    def __init__(self, path: Sequence[str]):
        super().__init__(
            "Circular dependency detected: " + " -> ".join(path),
            identifier=path[-1] if path else None,
        )
        self.path = list(path)
