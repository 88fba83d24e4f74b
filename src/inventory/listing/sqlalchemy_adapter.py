"""SQLAlchemy-backed listing store.

Availability flips are issued as ``UPDATE listings SET availability = :new
WHERE id = :id AND availability = :expected``; the database's row lock makes
each one atomic, so the reservation logic stays correct across any number of
service instances sharing the database.
"""

from sqlalchemy import (
    Column,
    Float,
    MetaData,
    String,
    Table,
    create_engine,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from shared.exceptions import ListingNotFound

from inventory.listing.port import Availability, Listing, ListingStore

metadata = MetaData()

listings = Table(
    "listings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("price", Float, nullable=False),
    Column("category", String(100)),
    Column("breed", String(100)),
    Column("weight", String(50)),
    Column("availability", String(20), nullable=False, default=Availability.AVAILABLE.value),
)

_UPSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class SqlAlchemyListingStore(ListingStore):
    """Listing store over any SQLAlchemy engine (PostgreSQL in production)."""

    def __init__(self, database_uri: str, **engine_options) -> None:
        self.engine = create_engine(database_uri, **engine_options)

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def drop_schema(self) -> None:
        metadata.drop_all(self.engine)

    def add(self, listing: Listing) -> None:
        values = {
            "id": str(listing.listing_id),
            "name": listing.name,
            "price": listing.price,
            "category": listing.category,
            "breed": listing.breed,
            "weight": listing.weight,
            "availability": listing.availability,
        }
        insert_fn = _UPSERTS.get(self.engine.dialect.name)
        if insert_fn is None:
            raise ValueError(f"Unsupported dialect for listing store: {self.engine.dialect.name}")

        stmt = insert_fn(listings).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[listings.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        with self.engine.begin() as conn:
            conn.execute(stmt)

    def get(self, listing_id: str) -> Listing:
        with self.engine.connect() as conn:
            row = conn.execute(select(listings).where(listings.c.id == str(listing_id))).mappings().first()
        if row is None:
            raise ListingNotFound({"listing_id": [f"Listing {listing_id} not found"]})
        return Listing(
            listing_id=row["id"],
            name=row["name"],
            price=row["price"],
            category=row["category"],
            breed=row["breed"],
            weight=row["weight"],
            availability=row["availability"],
        )

    def get_availability(self, listing_id: str) -> Availability:
        with self.engine.connect() as conn:
            value = conn.execute(
                select(listings.c.availability).where(listings.c.id == str(listing_id))
            ).scalar_one_or_none()
        if value is None:
            raise ListingNotFound({"listing_id": [f"Listing {listing_id} not found"]})
        return Availability(value)

    def conditional_set_availability(
        self,
        listing_id: str,
        expected: Availability,
        new: Availability,
    ) -> bool:
        stmt = (
            update(listings)
            .where(listings.c.id == str(listing_id))
            .where(listings.c.availability == expected.value)
            .values(availability=new.value)
        )
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
            if result.rowcount == 1:
                return True
            exists = conn.execute(select(listings.c.id).where(listings.c.id == str(listing_id))).first()

        if exists is None:
            raise ListingNotFound({"listing_id": [f"Listing {listing_id} not found"]})
        return False
