from functools import lru_cache

from api.controller import SolarController
from solar_switch.settings import Settings, load_settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_controller() -> SolarController:
    return SolarController(get_settings())
