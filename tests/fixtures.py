"""
Test Fixtures

Common test classes used across test modules
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional

from wirebox import ContainerInterface


class Mailer:
    """Mailer configured with a DSN string"""

    def __init__(self, dsn: str):
        self.dsn = dsn
        self.sent: List[tuple] = []

    def send_email(self, recipient: str, subject: str, body: str) -> None:
        self.sent.append((recipient, subject, body))


class UserService:
    """Service depending on Mailer plus a scalar admin email"""

    def __init__(self, mailer: Mailer, admin_email: str):
        self.mailer = mailer
        self.admin_email = admin_email

    def register_user(self, username: str, email: str) -> None:
        self.mailer.send_email(email, "Welcome to our app!", f"Hello {username}, welcome!")
        self.mailer.send_email(self.admin_email, "New User Registered", f"User {username} registered!")


class MailerInterface(ABC):
    """Abstract mailer with no default binding"""

    @abstractmethod
    def send_email(self, recipient: str, subject: str, body: str) -> None:
        pass


class SmtpMailer(MailerInterface):
    """Concrete MailerInterface implementation"""

    def __init__(self, dsn: str = "smtp://localhost:1025"):
        self.dsn = dsn

    def send_email(self, recipient: str, subject: str, body: str) -> None:
        pass


class Notifier:
    """Depends on the abstract mailer"""

    def __init__(self, mailer: MailerInterface):
        self.mailer = mailer


class Database:
    """Test database class"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache service"""

    def __init__(self):
        self.cache = {}


class UserRepository:
    """Test repository with dependencies"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class CounterService:
    """Service with mutable state for testing singleton behavior"""

    instances = 0

    def __init__(self):
        CounterService.instances += 1
        self.counter = 0

    def increment(self):
        self.counter += 1
        return self.counter


class ServiceWithoutHint:
    """Service with missing type hint - for error testing"""

    def __init__(self, dependency):  # No type hint!
        self.dependency = dependency


class ServiceWithDefaults:
    """Service whose scalar parameters have defaults"""

    def __init__(self, db: Database, retries: int = 3, label: Optional[str] = None):
        self.db = db
        self.retries = retries
        self.label = label


class ServiceWithOptionalInterface:
    """Nullable dependency on an interface nobody bound"""

    def __init__(self, mailer: Optional[MailerInterface]):
        self.mailer = mailer


class ServiceWithKeywordOnly:
    """Keyword-only parameters are passed by name"""

    def __init__(self, db: Database, *, timeout: float = 1.5, cache: CacheService):
        self.db = db
        self.timeout = timeout
        self.cache = cache


class ServiceLocatorClient:
    """Asks for the container itself"""

    def __init__(self, container: ContainerInterface):
        self.container = container


class FailingService:
    """Constructor always raises"""

    def __init__(self):
        raise RuntimeError("boom")


class Level1:
    """First level of nested dependencies"""
    pass


class Level2:
    """Second level of nested dependencies"""

    def __init__(self, l1: Level1):
        self.l1 = l1


class Level3:
    """Third level of nested dependencies"""

    def __init__(self, l2: Level2):
        self.l2 = l2


class Level4:
    """Fourth level of nested dependencies"""

    def __init__(self, l3: Level3):
        self.l3 = l3


class CircularA:
    """A -> B -> A"""

    def __init__(self, b: 'CircularB'):
        self.b = b


class CircularB:
    """B -> A -> B"""

    def __init__(self, a: CircularA):
        self.a = a


class SelfDependent:
    """Depends on itself"""

    def __init__(self, me: 'SelfDependent'):
        self.me = me


def random_number() -> int:
    """Factory producing a fresh random integer per call"""
    return random.randint(1, 1_000_000_000)
