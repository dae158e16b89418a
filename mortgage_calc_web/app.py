import os
from decimal import Decimal
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request

from mortgage_calc.data_models import CalculatorDefaults, LoanInputs, ViewMode
from mortgage_calc.engine import calculate
from mortgage_calc.formatter import CURRENCY_OPTIONS, format_money, format_percent
from mortgage_calc.logging_config import configure_logging, get_logger
from mortgage_calc.main import result_to_dict
from mortgage_calc.utils import number_or_default

logger = get_logger(__name__)

app = Flask(__name__)
app.config["CALCULATOR_DEFAULTS"] = CalculatorDefaults(
    currency=os.environ.get("MORTGAGE_CALC_CURRENCY", "EUR").upper()
)


@app.template_filter("money")
def _money_filter(value, currency="EUR"):
    return format_money(value, currency)


@app.template_filter("percent")
def _percent_filter(value):
    return format_percent(value)


def _defaults() -> CalculatorDefaults:
    return app.config["CALCULATOR_DEFAULTS"]


def _normalized_currency(form) -> str:
    default = _defaults().currency
    code = (form.get("currency") or default).upper()
    return code if code in CURRENCY_OPTIONS else "EUR"


def _normalized_view(form) -> ViewMode:
    try:
        return ViewMode((form.get("view") or "").lower())
    except ValueError:
        return _defaults().view


def _whole_or_decimal(value: Decimal):
    """Return ``value`` as an ``int`` when it has no fractional part."""
    return int(value) if value == value.to_integral_value() else value


def _read_form(form) -> Dict[str, Any]:
    """Read the loan fields, substituting defaults for non-numeric input."""
    defaults = _defaults()
    return {
        "price": number_or_default(form.get("price"), defaults.price),
        "down_payment": number_or_default(form.get("down_payment"), defaults.down_payment),
        "annual_rate_percent": number_or_default(form.get("rate"), defaults.annual_rate_percent),
        "term_years": _whole_or_decimal(number_or_default(form.get("term"), defaults.term_years)),
        "extra_monthly_principal": number_or_default(form.get("extra"), defaults.extra_monthly_principal),
    }


def _form_to_inputs(form) -> LoanInputs:
    return LoanInputs.from_purchase(**_read_form(form))


def _validation_error(inputs: LoanInputs) -> Optional[str]:
    if inputs.principal <= 0:
        return "The down payment must be smaller than the price."
    if not isinstance(inputs.term_years, int):
        return "The loan term must be a whole number of years."
    if inputs.term_years < 1:
        return "The loan term must be at least one year."
    if inputs.term_years > _defaults().max_term_years:
        return f"The loan term cannot exceed {_defaults().max_term_years} years."
    if inputs.annual_rate_percent < 0:
        return "The interest rate cannot be negative."
    if inputs.extra_monthly_principal < 0:
        return "The extra payment cannot be negative."
    return None


def _rows_for_view(result, view: ViewMode, show_full_schedule: bool):
    """Return the rows to render and how many were cut off."""
    rows = result.rows_for(view)
    max_rows = _defaults().max_rows
    if show_full_schedule or not max_rows or len(rows) <= max_rows:
        return rows, 0
    return rows[:max_rows], len(rows) - max_rows


@app.route("/", methods=["GET", "POST"])
def index():
    form = request.values
    values = _read_form(form)
    inputs = LoanInputs.from_purchase(**values)
    view = _normalized_view(form)
    currency_code = _normalized_currency(form)
    show_full_schedule = form.get("show_full_schedule") == "1"

    result = None
    rows = []
    truncated = 0
    error = _validation_error(inputs)
    if error is None:
        result = calculate(inputs)
        rows, truncated = _rows_for_view(result, view, show_full_schedule)
    else:
        logger.info("Rejected calculator input: %s", error)

    return render_template(
        "index.html",
        inputs=inputs,
        values=values,
        result=result,
        rows=rows,
        truncated=truncated,
        view=view,
        view_modes=list(ViewMode),
        show_full_schedule=show_full_schedule,
        error=error,
        currency_code=currency_code,
        currency_options=CURRENCY_OPTIONS,
    )


@app.get("/api/schedule")
def api_schedule():
    inputs = _form_to_inputs(request.args)
    error = _validation_error(inputs)
    if error is not None:
        return jsonify({"error": error}), 400
    result = calculate(inputs)
    return jsonify(result_to_dict(result, _normalized_view(request.args)))


if __name__ == "__main__":
    configure_logging()
    print("Starting Mortgage Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
