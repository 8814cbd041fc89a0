"""
PostgreSQL schema for the World Property backend
"""

from world_property.models.enums import HostType, ListingMode, PrincipalType, PropertyType, UserRole, WorkflowStage


def _enum_check(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"CHECK ({column} IN ({values}))"


SCHEMA_STATEMENTS = [
    f"""
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        role TEXT NOT NULL {_enum_check('role', UserRole)},
        created_at TIMESTAMPTZ NOT NULL,
        last_login_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS agent_profiles (
        user_id TEXT PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
        company TEXT,
        phone TEXT,
        license_number TEXT,
        bio TEXT,
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS listings (
        id TEXT PRIMARY KEY,
        mode TEXT NOT NULL DEFAULT 'buy' {_enum_check('mode', ListingMode)},
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        country TEXT NOT NULL,
        city TEXT NOT NULL,
        address TEXT NOT NULL,
        lat DOUBLE PRECISION NOT NULL,
        lng DOUBLE PRECISION NOT NULL,
        sale_price DOUBLE PRECISION,
        rent_per_month DOUBLE PRECISION,
        night_rate DOUBLE PRECISION,
        currency TEXT NOT NULL,
        beds INTEGER NOT NULL,
        baths INTEGER NOT NULL,
        area_sqm DOUBLE PRECISION NOT NULL,
        property_type TEXT NOT NULL {_enum_check('property_type', PropertyType)},
        images JSONB NOT NULL,
        amenities JSONB NOT NULL,
        host_type TEXT NOT NULL {_enum_check('host_type', HostType)},
        created_at TIMESTAMPTZ NOT NULL,
        owner_user_id TEXT NOT NULL REFERENCES users(id) ON DELETE RESTRICT
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS saved_listings (
        principal_type TEXT NOT NULL {_enum_check('principal_type', PrincipalType)},
        principal_id TEXT NOT NULL,
        listing_id TEXT NOT NULL REFERENCES listings(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL,
        PRIMARY KEY (principal_type, principal_id, listing_id)
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS saved_searches (
        id BIGSERIAL PRIMARY KEY,
        principal_type TEXT NOT NULL {_enum_check('principal_type', PrincipalType)},
        principal_id TEXT NOT NULL,
        query JSONB NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS offers (
        offer_id TEXT PRIMARY KEY,
        listing_id TEXT NOT NULL REFERENCES listings(id) ON DELETE RESTRICT,
        amount_minor BIGINT NOT NULL CHECK (amount_minor > 0),
        currency_code TEXT NOT NULL,
        status TEXT NOT NULL,
        principal_type TEXT NOT NULL {_enum_check('principal_type', PrincipalType)},
        principal_id TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS legal_cases (
        case_id TEXT PRIMARY KEY,
        offer_id TEXT NOT NULL UNIQUE REFERENCES offers(offer_id) ON DELETE RESTRICT,
        listing_id TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS legal_workflow_states (
        case_id TEXT PRIMARY KEY,
        stage TEXT NOT NULL {_enum_check('stage', WorkflowStage)},
        version INTEGER NOT NULL CHECK (version > 0),
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS audit_events (
        event_id TEXT PRIMARY KEY,
        event_type TEXT NOT NULL,
        occurred_at TIMESTAMPTZ NOT NULL,
        actor_id TEXT,
        case_id TEXT,
        metadata JSONB NOT NULL DEFAULT '{}'::jsonb
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value JSONB NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_listings_mode_created_at ON listings(mode, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_listings_coords ON listings(lat, lng)",
    "CREATE INDEX IF NOT EXISTS idx_saved_searches_principal ON saved_searches(principal_type, principal_id, id DESC)",
    "CREATE INDEX IF NOT EXISTS idx_offers_listing ON offers(listing_id, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_audit_events_case ON audit_events(case_id, occurred_at)",
]
