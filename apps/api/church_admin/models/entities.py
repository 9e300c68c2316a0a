from datetime import date, datetime, timezone
from datetime import date as date_type
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from church_admin.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sql_enum(enum_cls: type[Enum], name: str) -> SqlEnum:
    # Persist the wire values (e.g. "PENDING_APPROVAL"), not the member names.
    return SqlEnum(enum_cls, name=name, values_callable=lambda cls: [item.value for item in cls])


class UserRoleEnum(str, Enum):
    admin = "ADMIN"
    pastor = "PASTOR"
    staff = "STAFF"
    member = "MEMBER"


class MemberStatusEnum(str, Enum):
    active = "ACTIVE"
    pending_approval = "PENDING_APPROVAL"
    inactive = "INACTIVE"


class FamilyRoleEnum(str, Enum):
    head = "HEAD"
    spouse = "SPOUSE"
    father = "FATHER"
    mother = "MOTHER"
    son = "SON"
    daughter = "DAUGHTER"
    grandfather = "GRANDFATHER"
    grandmother = "GRANDMOTHER"
    member = "MEMBER"


class MinistryRoleEnum(str, Enum):
    leader = "LEADER"
    member = "MEMBER"


class EventStatusEnum(str, Enum):
    draft = "DRAFT"
    published = "PUBLISHED"


class SacramentTypeEnum(str, Enum):
    baptism = "BAPTISM"
    confirmation = "CONFIRMATION"
    eucharist = "EUCHARIST"
    marriage = "MARRIAGE"
    holy_orders = "HOLY_ORDERS"
    anointing_of_the_sick = "ANOINTING_OF_THE_SICK"
    funeral = "FUNERAL"


class BroadcastStatusEnum(str, Enum):
    draft = "DRAFT"
    sent = "SENT"


class PrayerStatusEnum(str, Enum):
    pending = "PENDING"
    acknowledged = "ACKNOWLEDGED"
    prayed = "PRAYED"
    answered = "ANSWERED"


user_role_sql_enum = _sql_enum(UserRoleEnum, "userroleenum")
member_status_sql_enum = _sql_enum(MemberStatusEnum, "memberstatusenum")
family_role_sql_enum = _sql_enum(FamilyRoleEnum, "familyroleenum")
ministry_role_sql_enum = _sql_enum(MinistryRoleEnum, "ministryroleenum")
event_status_sql_enum = _sql_enum(EventStatusEnum, "eventstatusenum")
sacrament_type_sql_enum = _sql_enum(SacramentTypeEnum, "sacramenttypeenum")
broadcast_status_sql_enum = _sql_enum(BroadcastStatusEnum, "broadcaststatusenum")
prayer_status_sql_enum = _sql_enum(PrayerStatusEnum, "prayerstatusenum")


# A related pair is stored once, in whichever direction it was linked.
family_relations = Table(
    "family_relations",
    Base.metadata,
    Column("family_id", ForeignKey("families.id"), primary_key=True),
    Column("related_family_id", ForeignKey("families.id"), primary_key=True),
)


class Family(Base):
    __tablename__ = "families"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    house_name: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class House(Base):
    __tablename__ = "houses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    family_id: Mapped[int] = mapped_column(ForeignKey("families.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    head_member_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", use_alter=True, name="fk_houses_head_member_id")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    profile_image: Mapped[str | None] = mapped_column(String(1024))
    gender: Mapped[str | None] = mapped_column(String(20))
    dob: Mapped[date | None] = mapped_column(Date)
    status: Mapped[MemberStatusEnum] = mapped_column(
        member_status_sql_enum, nullable=False, default=MemberStatusEnum.active
    )
    family_id: Mapped[int | None] = mapped_column(ForeignKey("families.id"))
    house_id: Mapped[int | None] = mapped_column(ForeignKey("houses.id"))
    family_role: Mapped[FamilyRoleEnum | None] = mapped_column(family_role_sql_enum)
    head_of_family: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    spouse_id: Mapped[int | None] = mapped_column(ForeignKey("members.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    family: Mapped[Family | None] = relationship(Family, foreign_keys=[family_id])


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    username: Mapped[str | None] = mapped_column(String(255), unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRoleEnum] = mapped_column(user_role_sql_enum, nullable=False, default=UserRoleEnum.member)
    member_id: Mapped[int | None] = mapped_column(ForeignKey("members.id"), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    member: Mapped[Member | None] = relationship(Member)


class Ministry(Base):
    __tablename__ = "ministries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    meeting_schedule: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class MinistryMember(Base):
    __tablename__ = "ministry_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ministry_id: Mapped[int] = mapped_column(ForeignKey("ministries.id"), nullable=False)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), nullable=False)
    role: Mapped[MinistryRoleEnum] = mapped_column(
        ministry_role_sql_enum, nullable=False, default=MinistryRoleEnum.member
    )

    __table_args__ = (UniqueConstraint("ministry_id", "member_id", name="uq_ministry_member"),)


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[str | None] = mapped_column(String(255))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    status: Mapped[EventStatusEnum] = mapped_column(event_status_sql_enum, nullable=False, default=EventStatusEnum.draft)
    is_live: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_registration"),)


class Sacrament(Base):
    __tablename__ = "sacraments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[SacramentTypeEnum] = mapped_column(sacrament_type_sql_enum, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), nullable=False)
    details: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    member: Mapped[Member] = relationship(Member)


class GalleryCategory(Base):
    __tablename__ = "gallery_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class GalleryAlbum(Base):
    __tablename__ = "gallery_albums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category_id: Mapped[int] = mapped_column(ForeignKey("gallery_categories.id"), nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(1024))
    date: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    album_id: Mapped[int] = mapped_column(ForeignKey("gallery_albums.id"), nullable=False)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class ChurchSettings(Base):
    __tablename__ = "church_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    church_name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(255))
    logo_url: Mapped[str | None] = mapped_column(String(1024))
    description: Mapped[str | None] = mapped_column(Text)


class Content(Base):
    __tablename__ = "contents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    media_url: Mapped[str | None] = mapped_column(String(1024))
    date: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="GENERAL")
    data: Mapped[str] = mapped_column(Text, default="{}")
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class DeviceToken(Base):
    __tablename__ = "device_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    token: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    platform: Mapped[str] = mapped_column(String(20), nullable=False)


class Broadcast(Base):
    __tablename__ = "broadcasts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[str] = mapped_column(Text, default="{}")
    status: Mapped[BroadcastStatusEnum] = mapped_column(
        broadcast_status_sql_enum, nullable=False, default=BroadcastStatusEnum.draft
    )
    sent_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class PrayerRequest(Base):
    __tablename__ = "prayer_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[PrayerStatusEnum] = mapped_column(
        prayer_status_sql_enum, nullable=False, default=PrayerStatusEnum.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    user: Mapped[User] = relationship(User)


Index("ix_members_family_house", Member.family_id, Member.house_id)
Index("ix_members_status", Member.status)
Index("ix_houses_family", House.family_id)
Index("ix_sacraments_member_date", Sacrament.member_id, Sacrament.date)
Index("ix_gallery_images_album", GalleryImage.album_id)
Index("ix_notifications_user", Notification.user_id, Notification.created_at)
Index("ix_contents_type_date", Content.type, Content.date)
Index("ix_prayer_requests_status", PrayerRequest.status, PrayerRequest.created_at)
