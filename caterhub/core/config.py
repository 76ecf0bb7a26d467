import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Prefer .env.production if present, else default .env
if os.path.exists(".env.production"):
    load_dotenv(".env.production")
else:
    load_dotenv()


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./caterhub.db"
    sql_echo: bool = False
    log_level: str = "INFO"

    # Business details used on receipts and messaging links
    business_name: str = "Ghar Ka Khana"
    business_tagline: str = "Homestyle Indian Cuisine"
    business_phone: str = "+1-201-713-1850"
    whatsapp_number: str = "12017131850"
    business_timezone: str = "America/New_York"

    order_number_prefix: str = "ORD"
    cors_origins: List[str] = ["*"]

    # DigitalOcean Spaces (menu item photos)
    do_spaces_key: str | None = None
    do_spaces_secret: str | None = None
    do_spaces_region: str = "nyc3"
    do_spaces_bucket: str | None = None
    do_spaces_endpoint: str | None = None  # e.g. https://nyc3.digitaloceanspaces.com
    do_spaces_cdn_base: str | None = None  # e.g. https://<bucket>.nyc3.cdn.digitaloceanspaces.com
    do_spaces_prefix: str = "prod"


settings = Settings()
