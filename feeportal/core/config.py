from decimal import Decimal
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

from feeportal.core.enums import ReceiptNumberMode


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    fee_api_base_url: str = Field("https://svnfeebackend.onrender.com", alias="FEE_API_BASE_URL")
    fee_api_timeout_seconds: float = Field(30.0, alias="FEE_API_TIMEOUT_SECONDS")

    default_total_fee: Decimal = Field(Decimal("10000"), alias="DEFAULT_TOTAL_FEE")

    receipt_number_prefix: str = Field("NNG", alias="RECEIPT_NUMBER_PREFIX")
    receipt_number_mode: ReceiptNumberMode = Field(ReceiptNumberMode.RANDOM, alias="RECEIPT_NUMBER_MODE")
    receipt_number_cache_size: int = Field(10000, ge=1, alias="RECEIPT_NUMBER_CACHE_SIZE")

    institution_name: str = Field("N.N.GHOSH SANATAN TEACHERS TRAINING COLLEGE", alias="INSTITUTION_NAME")
    institution_address: str = Field("JAMUARY, KANKE, RANCHI-834006(JHARKHAND)", alias="INSTITUTION_ADDRESS")
    institution_phone: str = Field("06512913165", alias="INSTITUTION_PHONE")
    course_name: str = Field("B.Ed", alias="COURSE_NAME")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: List[str] = Field(["*"], alias="CORS_ALLOW_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
