from dataclasses import dataclass, field

from daraja.errors import BuilderError


@dataclass(frozen=True)
class Credentials:
    """Consumer key / secret pair of a Daraja app"""
    consumer_key: str
    consumer_secret: str = field(repr=False)

    def __post_init__(self):
        if not self.consumer_key:
            raise BuilderError.uninitialized_field('consumer_key')
        if not self.consumer_secret:
            raise BuilderError.uninitialized_field('consumer_secret')

    def basic_auth(self):
        return self.consumer_key, self.consumer_secret
