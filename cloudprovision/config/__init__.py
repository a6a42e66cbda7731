_config = {
    "container.list.results_per_page": 1000,
    "container.force_destroy.max_attempts": 5,
    "container.force_destroy.progress_bar": False,
    "swift.retries": 5,
    "swift.auth_version": "3",
}


def get_config():
    return _config


__all__ = ["get_config"]
