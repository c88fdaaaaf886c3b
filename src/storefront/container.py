"""Composition root: wires ports to adapters and use cases to ports.

Nothing below the HTTP layer looks anything up globally. Each adapter is
handed the Protean domain it stores into, and each use case is handed the
ports it needs.
"""

from dataclasses import dataclass
from datetime import timedelta

from protean.domain import Domain

from catalogue.product.catalog import Catalog, ProteanCatalog
from catalogue.product.lookup import LoadProductById
from identity.access.authentication import Authenticate
from identity.access.control import AccessControl
from identity.access.passwords import BcryptPasswordHasher, PasswordHasher
from identity.access.tokens import AccessTokens, JwtAccessTokens
from identity.customer.directory import ProteanUserDirectory, UserDirectory
from ordering.cart.completion import LoadCompleteCart
from ordering.cart.consolidation import AddProductToCart
from ordering.cart.store import CartStore, ProteanCartStore
from ordering.checkout.handoff import Checkout
from ordering.checkout.store import ProteanPurchaseIntentStore, PurchaseIntentStore
from ordering.order.creation import CreateOrder
from ordering.order.lookup import LoadOrder
from ordering.order.store import OrderStore, ProteanOrderStore
from ordering.order.update import UpdateOrder
from payments.gateway import build_gateway
from payments.gateway.port import PaymentGateway
from payments.webhook.parser import StripeEventParser
from payments.webhook.reconciliation import PaymentEventReconciliation
from payments.webhook.signature import SignatureVerifier, StripeSignatureVerifier
from shared.ids import IdGenerator, UuidIdGenerator
from shared.locks import KeyedLock
from storefront.config import Settings
from storefront.domains import init_domains


@dataclass
class Container:
    settings: Settings
    catalogue: Domain
    identity: Domain
    ordering: Domain

    # Ports
    catalog: Catalog
    users: UserDirectory
    carts: CartStore
    intents: PurchaseIntentStore
    orders: OrderStore
    gateway: PaymentGateway
    tokens: AccessTokens
    passwords: PasswordHasher
    verifier: SignatureVerifier

    # Use cases
    access: AccessControl
    authenticate: Authenticate
    load_product: LoadProductById
    add_product_to_cart: AddProductToCart
    load_complete_cart: LoadCompleteCart
    checkout: Checkout
    create_order: CreateOrder
    update_order: UpdateOrder
    load_order: LoadOrder
    reconciliation: PaymentEventReconciliation


def build_container(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    ids: IdGenerator | None = None,
) -> Container:
    settings = settings or Settings.from_env()
    domains = init_domains()
    ids = ids or UuidIdGenerator()
    gateway = gateway or build_gateway(settings)

    catalog = ProteanCatalog(domains["catalogue"])
    users = ProteanUserDirectory(domains["identity"])
    carts = ProteanCartStore(domains["ordering"])
    intents = ProteanPurchaseIntentStore(domains["ordering"])
    orders = ProteanOrderStore(domains["ordering"])
    tokens = JwtAccessTokens(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )
    passwords = BcryptPasswordHasher(rounds=settings.password_hash_rounds)
    verifier = StripeSignatureVerifier(settings.webhook_secret, tolerance=settings.webhook_tolerance)

    load_complete_cart = LoadCompleteCart(carts, catalog)
    create_order = CreateOrder(
        intents,
        orders,
        ids,
        default_status=settings.default_order_status,
        default_payment_status=settings.default_payment_status,
    )
    update_order = UpdateOrder(orders)

    return Container(
        settings=settings,
        catalogue=domains["catalogue"],
        identity=domains["identity"],
        ordering=domains["ordering"],
        catalog=catalog,
        users=users,
        carts=carts,
        intents=intents,
        orders=orders,
        gateway=gateway,
        tokens=tokens,
        passwords=passwords,
        verifier=verifier,
        access=AccessControl(tokens, users),
        authenticate=Authenticate(users, passwords, tokens),
        load_product=LoadProductById(catalog),
        add_product_to_cart=AddProductToCart(catalog, carts, ids, KeyedLock()),
        load_complete_cart=load_complete_cart,
        checkout=Checkout(load_complete_cart, users, intents, gateway, ids, currency=settings.currency),
        create_order=create_order,
        update_order=update_order,
        load_order=LoadOrder(orders),
        reconciliation=PaymentEventReconciliation(
            verifier=verifier,
            parser=StripeEventParser(),
            users=users,
            intents=intents,
            orders=orders,
            create_order=create_order,
            update_order=update_order,
        ),
    )
