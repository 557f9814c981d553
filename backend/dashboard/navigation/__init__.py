from dashboard.navigation.sidebar_data import sidebar_data

__all__ = ["sidebar_data"]
