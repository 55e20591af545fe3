"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from bandlab.config import (
    AWSSettings,
    ContentSettings,
    ImageSettings,
    ListingSettings,
    MessagingSettings,
    Settings,
    StorageSettings,
    TimeoutSettings,
)
from bandlab.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each settings section is also provided on its own so consumers only see
    what they use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_aws_settings(self, settings: Settings) -> AWSSettings:
        return settings.aws

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage

    @provide
    def provide_messaging_settings(self, settings: Settings) -> MessagingSettings:
        return settings.messaging

    @provide
    def provide_timeout_settings(self, settings: Settings) -> TimeoutSettings:
        return settings.timeouts

    @provide
    def provide_image_settings(self, settings: Settings) -> ImageSettings:
        return settings.images

    @provide
    def provide_content_settings(self, settings: Settings) -> ContentSettings:
        return settings.content

    @provide
    def provide_listing_settings(self, settings: Settings) -> ListingSettings:
        return settings.listing
