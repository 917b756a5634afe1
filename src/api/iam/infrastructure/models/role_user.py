"""Association table linking users to the roles they hold."""

from sqlalchemy import Column, ForeignKey, String, Table

from infrastructure.database.models import Base

# Links disappear with either side; soft-deleted roles are filtered on read
role_user_table = Table(
    "role_user",
    Base.metadata,
    Column(
        "role_id",
        String(26),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
