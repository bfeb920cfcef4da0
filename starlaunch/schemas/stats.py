from starlaunch.schemas.common import CamelModel


class GlobalStats(CamelModel):
    total_users: int
    daily_active_users: int
    active_projects: int
    total_points_minted: float
