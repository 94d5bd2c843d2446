import logging


def setup_logging(debug: bool, level_name: str | None = None) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    # SONGSLIDES_LOG_LEVEL (passed in as level_name) wins over --debug
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
