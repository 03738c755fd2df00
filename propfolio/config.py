from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Reporting
    default_report_months: int = 6
    top_expense_categories: int = 3

    # Financing policy (lenders and the refinance target change these)
    mortgage_rate: Decimal = Decimal("0.07")
    loan_term_years: int = 30
    cash_remaining: Decimal = Decimal("20000")


settings = Settings()
