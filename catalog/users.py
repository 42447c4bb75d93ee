from typing import Any, Dict, List, Optional

from adapters.base import DatabaseAdapter

_SELECT = "SELECT id, name, email, phone, profile_pic, created_at FROM users"


def _to_client(row: Dict[str, Any]) -> Dict[str, Any]:
    user = dict(row)
    user["profilePic"] = user.pop("profile_pic", None)
    return user


async def list_users(adapter: DatabaseAdapter) -> List[Dict[str, Any]]:
    result = await adapter.run_query(f"{_SELECT} ORDER BY id DESC")
    return [_to_client(row) for row in result.rows]


async def get_user(adapter: DatabaseAdapter, user_id: int) -> Optional[Dict[str, Any]]:
    result = await adapter.run_query(f"{_SELECT} WHERE id = ?", [user_id])
    if not result.rows:
        return None
    return _to_client(result.rows[0])


async def create_user(adapter: DatabaseAdapter, name: str, email: str, phone: str, profile_pic: str) -> int:
    result = await adapter.run_query(
        "INSERT INTO users (name, email, phone, profile_pic) VALUES (?, ?, ?, ?)",
        [name, email, phone, profile_pic],
    )
    return int(result.inserted_id)


async def update_user(
    adapter: DatabaseAdapter,
    user_id: int,
    name: str,
    email: str,
    phone: str,
    profile_pic: Optional[str] = None,
) -> bool:
    if profile_pic:
        result = await adapter.run_query(
            "UPDATE users SET name = ?, email = ?, phone = ?, profile_pic = ? WHERE id = ?",
            [name, email, phone, profile_pic, user_id],
        )
    else:
        result = await adapter.run_query(
            "UPDATE users SET name = ?, email = ?, phone = ? WHERE id = ?",
            [name, email, phone, user_id],
        )
    return result.affected_rows > 0


async def delete_user(adapter: DatabaseAdapter, user_id: int) -> bool:
    result = await adapter.run_query("DELETE FROM users WHERE id = ?", [user_id])
    return result.affected_rows > 0
