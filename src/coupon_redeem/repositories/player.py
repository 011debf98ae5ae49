"""Repository for players."""

from coupon_redeem.models.player import Player
from coupon_redeem.repositories.base import BaseRepository


class PlayerRepository(BaseRepository[Player]):
    """Repository for Player database operations."""

    model = Player
