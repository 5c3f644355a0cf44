"""
Service wiring

Services are built once at startup from the Database, the Shopify clients
and the settings, then shared by every request through app.state.
"""

from dataclasses import dataclass

from fastapi import Request

from variant_badges.core.config.settings import Settings
from variant_badges.core.database import Database
from variant_badges.domains.analytics.services import BadgeAnalyticsService
from variant_badges.domains.badges.services import BadgeService, SettingsService
from variant_badges.domains.billing.services import (
    BadgeCleanupService,
    BillingService,
    PlanLimitGate,
    PlanResolver,
)
from variant_badges.domains.shopify.services import ShopifyClients
from variant_badges.domains.shops.services import ShopLifecycleService, ThemeSetupService
from variant_badges.repository import (
    BadgeAnalyticsRepository,
    BadgeAssignmentRepository,
    SettingsRepository,
    ShopRepository,
    SubscriptionRepository,
)
from variant_badges.webhooks import ShopifyWebhookVerifier


@dataclass
class ServiceContainer:
    settings: Settings
    database: Database
    shopify: ShopifyClients
    shops: ShopRepository
    badges_repository: BadgeAssignmentRepository
    resolver: PlanResolver
    gate: PlanLimitGate
    cleanup: BadgeCleanupService
    settings_service: SettingsService
    badge_service: BadgeService
    billing_service: BillingService
    lifecycle: ShopLifecycleService
    setup: ThemeSetupService
    analytics: BadgeAnalyticsService
    verifier: ShopifyWebhookVerifier


def build_services(
    settings: Settings, database: Database, shopify: ShopifyClients
) -> ServiceContainer:
    shops = ShopRepository(database)
    settings_repository = SettingsRepository(database)
    badges = BadgeAssignmentRepository(database)
    subscriptions = SubscriptionRepository(database)
    analytics = BadgeAnalyticsRepository(database)

    free_cap = settings.plans.FREE_PLAN_MAX_PRODUCTS
    cleanup = BadgeCleanupService(badges, free_cap)
    resolver = PlanResolver(database, subscriptions, cleanup)
    gate = PlanLimitGate(resolver, badges, free_cap)
    settings_service = SettingsService(database, settings_repository, badges)

    return ServiceContainer(
        settings=settings,
        database=database,
        shopify=shopify,
        shops=shops,
        badges_repository=badges,
        resolver=resolver,
        gate=gate,
        cleanup=cleanup,
        settings_service=settings_service,
        badge_service=BadgeService(
            badges,
            settings_service,
            gate,
            shopify.products,
            settings.plans.badge_types,
        ),
        billing_service=BillingService(
            shopify.billing,
            shops,
            subscriptions,
            badges,
            resolver,
            settings.plans,
            settings.shopify,
        ),
        lifecycle=ShopLifecycleService(
            database, shops, settings_repository, badges, subscriptions, analytics
        ),
        setup=ThemeSetupService(shopify.themes, settings.shopify),
        analytics=BadgeAnalyticsService(analytics),
        verifier=ShopifyWebhookVerifier(settings.shopify.SHOPIFY_API_SECRET),
    )


def get_services(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the application's services"""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services have not been initialized")
    return services
