"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum("ADMIN", "PASTOR", "STAFF", "MEMBER", name="userroleenum")
member_status = sa.Enum("ACTIVE", "PENDING_APPROVAL", "INACTIVE", name="memberstatusenum")
family_role = sa.Enum(
    "HEAD",
    "SPOUSE",
    "FATHER",
    "MOTHER",
    "SON",
    "DAUGHTER",
    "GRANDFATHER",
    "GRANDMOTHER",
    "MEMBER",
    name="familyroleenum",
)
ministry_role = sa.Enum("LEADER", "MEMBER", name="ministryroleenum")
event_status = sa.Enum("DRAFT", "PUBLISHED", name="eventstatusenum")
sacrament_type = sa.Enum(
    "BAPTISM",
    "CONFIRMATION",
    "EUCHARIST",
    "MARRIAGE",
    "HOLY_ORDERS",
    "ANOINTING_OF_THE_SICK",
    "FUNERAL",
    name="sacramenttypeenum",
)
broadcast_status = sa.Enum("DRAFT", "SENT", name="broadcaststatusenum")
prayer_status = sa.Enum("PENDING", "ACKNOWLEDGED", "PRAYED", "ANSWERED", name="prayerstatusenum")


def upgrade() -> None:
    op.create_table(
        "families",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("house_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "family_relations",
        sa.Column("family_id", sa.Integer(), sa.ForeignKey("families.id"), primary_key=True),
        sa.Column("related_family_id", sa.Integer(), sa.ForeignKey("families.id"), primary_key=True),
    )
    # houses.head_member_id -> members is added once members exists.
    op.create_table(
        "houses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("family_id", sa.Integer(), sa.ForeignKey("families.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("head_member_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_houses_family", "houses", ["family_id"])
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("profile_image", sa.String(length=1024), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("status", member_status, nullable=False),
        sa.Column("family_id", sa.Integer(), sa.ForeignKey("families.id"), nullable=True),
        sa.Column("house_id", sa.Integer(), sa.ForeignKey("houses.id"), nullable=True),
        sa.Column("family_role", family_role, nullable=True),
        sa.Column("head_of_family", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("spouse_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_members_family_house", "members", ["family_id", "house_id"])
    op.create_index("ix_members_status", "members", ["status"])
    op.create_foreign_key("fk_houses_head_member_id", "houses", "members", ["head_member_id"], ["id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("username", sa.String(length=255), nullable=True, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "ministries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("meeting_schedule", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "ministry_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ministry_id", sa.Integer(), sa.ForeignKey("ministries.id"), nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("role", ministry_role, nullable=False),
        sa.UniqueConstraint("ministry_id", "member_id", name="uq_ministry_member"),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("status", event_status, nullable=False),
        sa.Column("is_live", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "event_registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_registration"),
    )

    op.create_table(
        "sacraments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sacrament_type, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_sacraments_member_date", "sacraments", ["member_id", "date"])

    op.create_table(
        "gallery_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
    )
    op.create_table(
        "gallery_albums",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("gallery_categories.id"), nullable=False),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "gallery_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("album_id", sa.Integer(), sa.ForeignKey("gallery_albums.id"), nullable=False),
        sa.Column("url", sa.String(length=1024), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_gallery_images_album", "gallery_images", ["album_id"])

    op.create_table(
        "church_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("church_name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("logo_url", sa.String(length=1024), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "contents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("media_url", sa.String(length=1024), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_contents_type_date", "contents", ["type", "date"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False, server_default="GENERAL"),
        sa.Column("data", sa.Text(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_notifications_user", "notifications", ["user_id", "created_at"])
    op.create_table(
        "device_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("token", sa.String(length=512), nullable=False, unique=True),
        sa.Column("platform", sa.String(length=20), nullable=False),
    )
    op.create_table(
        "broadcasts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("data", sa.Text(), nullable=True),
        sa.Column("status", broadcast_status, nullable=False),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "prayer_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", prayer_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_prayer_requests_status", "prayer_requests", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_prayer_requests_status", table_name="prayer_requests")
    op.drop_table("prayer_requests")
    op.drop_table("broadcasts")
    op.drop_table("device_tokens")
    op.drop_index("ix_notifications_user", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_contents_type_date", table_name="contents")
    op.drop_table("contents")
    op.drop_table("church_settings")
    op.drop_index("ix_gallery_images_album", table_name="gallery_images")
    op.drop_table("gallery_images")
    op.drop_table("gallery_albums")
    op.drop_table("gallery_categories")
    op.drop_index("ix_sacraments_member_date", table_name="sacraments")
    op.drop_table("sacraments")
    op.drop_table("event_registrations")
    op.drop_table("events")
    op.drop_table("ministry_members")
    op.drop_table("ministries")
    op.drop_table("users")
    op.drop_constraint("fk_houses_head_member_id", "houses", type_="foreignkey")
    op.drop_index("ix_members_status", table_name="members")
    op.drop_index("ix_members_family_house", table_name="members")
    op.drop_table("members")
    op.drop_index("ix_houses_family", table_name="houses")
    op.drop_table("houses")
    op.drop_table("family_relations")
    op.drop_table("families")
    for enum in (
        prayer_status,
        broadcast_status,
        sacrament_type,
        event_status,
        ministry_role,
        family_role,
        member_status,
        user_role,
    ):
        enum.drop(op.get_bind(), checkfirst=True)
