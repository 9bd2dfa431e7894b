"""Platform management in database."""

from typing import Dict, List, Optional

from psycopg import Connection

from ..models import Platform


class PlatformManager:
    """Manage platforms in database."""

    def get_platform(self, conn: Connection, platform_id: int) -> Optional[Platform]:
        """Get platform by ID."""
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, name FROM platforms WHERE id = %s",
                (platform_id,),
            )
            row = cur.fetchone()
        return Platform(**row) if row else None

    def get_platforms(self, conn: Connection) -> List[Dict]:
        """Get all platforms."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT p.id, p.name, COUNT(a.id) AS article_count
                FROM platforms p
                LEFT JOIN articles a ON a.platform_id = p.id
                GROUP BY p.id, p.name
                ORDER BY p.id
                """
            )
            return cur.fetchall()

    def add_platform(self, conn: Connection, name: str) -> int:
        """
        Create a platform.

        Returns:
            Platform ID
        """
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO platforms (name) VALUES (%s) RETURNING id",
                (name,),
            )
            platform_id = cur.fetchone()["id"]

        conn.commit()
        return platform_id
