"""Salary Calc SDK - contributions, cumulative withholding and annual schedules."""

from .money import (
    round2,
    to_decimal,
    format_currency,
    format_plain,
)

from .schemas import (
    SalaryProfile,
    MonthlyContribution,
    CumulativeTaxState,
    MonthlyRecord,
    AnnualSummary,
    MonthlySchedule,
    DEFAULT_BASE_CAP,
    DEFAULT_FUND_RATIO,
)

from .contributions import calculate_contributions

from .taxes import (
    TaxBracket,
    MonthlyTaxResult,
    TAX_BRACKETS,
    MONTHLY_THRESHOLD,
    calculate_monthly_tax,
    select_bracket,
)

from .schedule import (
    calculate_month,
    iter_monthly_records,
    generate_schedule,
    generate_monthly_schedule,
    summarize_annual,
    compute_schedule,
)

from .validation import (
    ValidationError,
    InputValidationError,
    UnknownDeductionError,
    validate_salary,
    validate_fund_ratio,
    validate_deduction_amount,
    validate_special_deductions,
    build_profile,
)

from .deductions import (
    DeductionItem,
    DEDUCTION_CATALOG,
    default_deductions,
    resolve_deductions,
    total_deductions,
)

from .export import (
    render_schedule_csv,
    write_schedule_csv,
    default_export_filename,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_default_output_format,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    load_defaults,
    default_profile,
    ProfileDefaults,
    ProfileNotFoundError,
)

__all__ = [
    # Money
    "round2",
    "to_decimal",
    "format_currency",
    "format_plain",
    # Schemas
    "SalaryProfile",
    "MonthlyContribution",
    "CumulativeTaxState",
    "MonthlyRecord",
    "AnnualSummary",
    "MonthlySchedule",
    "DEFAULT_BASE_CAP",
    "DEFAULT_FUND_RATIO",
    # Engine
    "calculate_contributions",
    "TaxBracket",
    "MonthlyTaxResult",
    "TAX_BRACKETS",
    "MONTHLY_THRESHOLD",
    "calculate_monthly_tax",
    "select_bracket",
    "calculate_month",
    "iter_monthly_records",
    "generate_schedule",
    "generate_monthly_schedule",
    "summarize_annual",
    "compute_schedule",
    # Validation
    "ValidationError",
    "InputValidationError",
    "UnknownDeductionError",
    "validate_salary",
    "validate_fund_ratio",
    "validate_deduction_amount",
    "validate_special_deductions",
    "build_profile",
    # Deductions
    "DeductionItem",
    "DEDUCTION_CATALOG",
    "default_deductions",
    "resolve_deductions",
    "total_deductions",
    # Export
    "render_schedule_csv",
    "write_schedule_csv",
    "default_export_filename",
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_default_output_format",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "load_defaults",
    "default_profile",
    "ProfileDefaults",
    "ProfileNotFoundError",
]
