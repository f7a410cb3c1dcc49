"""youtube channel subscriptions and announcements

Revision ID: 0001_youtube_feeds
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_youtube_feeds"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "youtube_channel_subscriptions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("guild_id", sa.String(), nullable=False),
        sa.Column("channel_id", sa.String(), nullable=False),
        sa.Column("youtube_channel_id", sa.String(), nullable=False),
        sa.Column(
            "youtube_channel_name",
            sa.String(),
            nullable=False,
            server_default="",
        ),
        sa.Column(
            "mention_everyone",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "mention_roles",
            postgresql.ARRAY(sa.BigInteger()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        # 可空：NULL 表示未设置，读取时按 true 处理
        sa.Column(
            "publish_livestream",
            sa.Boolean(),
            nullable=True,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "publish_shorts",
            sa.Boolean(),
            nullable=True,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "enabled",
            sa.Boolean(),
            nullable=True,
            server_default=sa.text("true"),
        ),
    )
    op.create_index(
        "ix_youtube_channel_subscriptions_guild_id",
        "youtube_channel_subscriptions",
        ["guild_id"],
    )
    op.create_index(
        "ix_youtube_channel_subscriptions_channel_id",
        "youtube_channel_subscriptions",
        ["channel_id"],
    )
    op.create_index(
        "ix_youtube_channel_subscriptions_youtube_channel_id",
        "youtube_channel_subscriptions",
        ["youtube_channel_id"],
    )

    op.create_table(
        "youtube_announcements",
        sa.Column("guild_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "enabled",
            sa.Boolean(),
            nullable=True,
            server_default=sa.text("false"),
        ),
    )


def downgrade() -> None:
    op.drop_table("youtube_announcements")
    op.drop_index(
        "ix_youtube_channel_subscriptions_youtube_channel_id",
        table_name="youtube_channel_subscriptions",
    )
    op.drop_index(
        "ix_youtube_channel_subscriptions_channel_id",
        table_name="youtube_channel_subscriptions",
    )
    op.drop_index(
        "ix_youtube_channel_subscriptions_guild_id",
        table_name="youtube_channel_subscriptions",
    )
    op.drop_table("youtube_channel_subscriptions")
