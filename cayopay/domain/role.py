"""User roles and the permissions they grant."""

from __future__ import annotations

from enum import Enum


class Permission(Enum):
    """An action a role may be allowed to perform."""

    CONFIGURE_SETTINGS = "ConfigureSettings"
    SEND_INVITE = "SendInvite"
    VIEW_INVITE = "ViewInvite"
    REMOVE_USER = "RemoveUser"
    READ_USER_DETAILS = "ReadUserDetails"
    REMOVE_GUEST = "RemoveGuest"
    READ_GUEST_DETAILS = "ReadGuestDetails"


class Role(str, Enum):
    """The role of a user; its value is the stored lowercase name."""

    UNDEFINED = "undefined"
    OWNER = "owner"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Read a stored role name; unknown names give ``UNDEFINED``."""
        if value == "owner":
            return cls.OWNER
        if value == "admin":
            return cls.ADMIN
        return cls.UNDEFINED

    def permissions(self) -> list[Permission]:
        """The permissions this role grants, in a fixed order."""
        return list(_PERMISSIONS[self])

    def has_permission(self, perm: Permission) -> bool:
        return perm in _PERMISSIONS[self]

    def can_assign_role(self, target_role: "Role") -> bool:
        """Whether a user with this role may give ``target_role`` to another."""
        if self is Role.OWNER:
            return target_role in (Role.OWNER, Role.ADMIN)
        if self is Role.ADMIN:
            return target_role is Role.ADMIN
        return False


_PERMISSIONS: dict[Role, tuple[Permission, ...]] = {
    Role.OWNER: (
        Permission.CONFIGURE_SETTINGS,
        Permission.SEND_INVITE,
        Permission.VIEW_INVITE,
        Permission.REMOVE_USER,
        Permission.READ_USER_DETAILS,
        Permission.REMOVE_GUEST,
        Permission.READ_GUEST_DETAILS,
    ),
    Role.ADMIN: (
        Permission.SEND_INVITE,
        Permission.VIEW_INVITE,
        Permission.REMOVE_USER,
        Permission.READ_USER_DETAILS,
        Permission.REMOVE_GUEST,
        Permission.READ_GUEST_DETAILS,
    ),
    Role.UNDEFINED: (),
}