"""SQLAlchemy ORM models for the relational side of the Aroma data layer.

Only data that needs transactional upserts and has no TTL lives here:
password hashes, registered mobile devices and, for deployments that keep
them relational, Organizations with their owners and members.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class CredentialModel(Base, TimestampMixin):
    """ORM model for the credentials table.

    Holds one already-hashed password per User. Hashing happens upstream.
    """

    __tablename__ = "credentials"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    encrypted_password: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        """Return string representation without the secret."""
        return f"<CredentialModel(user_id={self.user_id})>"


class UserDeviceModel(Base, TimestampMixin):
    """ORM model for the user_devices table.

    Each row is one JSON-serialized MobileDevice registered by a User.
    """

    __tablename__ = "user_devices"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    serialized_device: Mapped[str] = mapped_column(String(1024), primary_key=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserDeviceModel(user_id={self.user_id})>"


class OrganizationModel(Base, TimestampMixin):
    """ORM model for the organizations table.

    Owners live in organization_owners and are removed with the row.
    Enum columns hold member names.
    """

    __tablename__ = "organizations"

    organization_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    organization_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    logo_link: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(String(32))
    organization_email: Mapped[str | None] = mapped_column(String(255))
    github_profile: Mapped[str | None] = mapped_column(Text)
    stock_market_symbol: Mapped[str | None] = mapped_column(String(16))
    tier: Mapped[str | None] = mapped_column(String(16))
    organization_description: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(Text)

    owners: Mapped[list[OrganizationOwnerModel]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OrganizationModel(organization_id={self.organization_id}, "
            f"organization_name={self.organization_name})>"
        )


class OrganizationOwnerModel(Base):
    """ORM model for the organization_owners table."""

    __tablename__ = "organization_owners"

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.organization_id", ondelete="CASCADE"),
        primary_key=True,
    )
    owner_id: Mapped[str] = mapped_column(String(36), primary_key=True)


class OrganizationMemberModel(Base, TimestampMixin):
    """ORM model for the organization_members table.

    Each row is a denormalized copy of a User listed in an Organization.
    There is no foreign key: members may be listed before the Organization
    row is written, and the repository deletes them before the Organization.
    """

    __tablename__ = "organization_members"

    organization_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255))
    first_name: Mapped[str | None] = mapped_column(String(255))
    middle_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))
    roles: Mapped[str | None] = mapped_column(Text)
    profile_image_link: Mapped[str | None] = mapped_column(Text)
    github_profile: Mapped[str | None] = mapped_column(Text)
    birthday: Mapped[int | None] = mapped_column(BigInteger)
    time_user_joined: Mapped[int | None] = mapped_column(BigInteger)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OrganizationMemberModel(organization_id={self.organization_id}, "
            f"user_id={self.user_id})>"
        )
