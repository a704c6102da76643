"""
Loan Amortization Calculations

Fixed-rate loan payment and principal paydown. Rates are passed as
percentages (e.g., 4.5 for 4.5%), the way they are entered on the
analysis form.
"""

from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage rate to a monthly decimal rate."""
    return annual_rate_pct / 100 / MONTHS_PER_YEAR


def monthly_payment(
    loan_amount: float, annual_rate_pct: float, term_years: int
) -> float:
    """
    Calculate the monthly payment on a fixed-rate loan.

    Uses the standard annuity formula. A zero rate falls back to straight
    division so the formula never evaluates 0/0.

    Args:
        loan_amount: Loan principal
        annual_rate_pct: Annual interest rate in percent (e.g., 4.5)
        term_years: Loan term in years

    Returns:
        Monthly payment amount (0 for a cash purchase)
    """
    if loan_amount <= 0:
        return 0.0

    r = monthly_rate(annual_rate_pct)
    n = term_years * MONTHS_PER_YEAR

    if r > 0:
        growth = (1 + r) ** n
        return loan_amount * r * growth / (growth - 1)

    return loan_amount / n


def amortize_year(
    opening_balance: float, payment: float, annual_rate_pct: float
) -> float:
    """
    Run twelve monthly payments against a balance.

    Returns the closing balance. The balance is clamped at zero each month,
    so an oversized final payment never drives it negative.
    """
    r = monthly_rate(annual_rate_pct)
    balance = opening_balance

    for _ in range(MONTHS_PER_YEAR):
        interest = balance * r
        principal = payment - interest
        balance = max(0.0, balance - principal)

    return balance


def generate_amortization_schedule(
    loan_amount: float,
    annual_rate_pct: float,
    term_years: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full monthly amortization schedule.

    Args:
        loan_amount: Loan principal
        annual_rate_pct: Annual interest rate in percent
        term_years: Loan term in years
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows, ending early once the loan is paid off
    """
    schedule = []
    balance = loan_amount
    r = monthly_rate(annual_rate_pct)
    payment = monthly_payment(loan_amount, annual_rate_pct, term_years)

    if start_date is None:
        start_date = date.today()

    for period in range(1, term_years * MONTHS_PER_YEAR + 1):
        if balance <= 0:
            break

        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * r
        principal_pmt = min(payment - interest, balance)
        ending_balance = max(0.0, balance - principal_pmt)

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(ending_balance, 2),
            }
        )

        balance = ending_balance

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)


def calculate_dscr(noi: float, debt_service: float) -> float:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Net Operating Income for the period
        debt_service: Debt service for the period

    Returns:
        DSCR ratio (infinity when there is no debt to service)
    """
    if debt_service == 0:
        return float("inf")
    return noi / debt_service


def calculate_loan_constant(
    loan_amount: float, annual_rate_pct: float, term_years: int
) -> float:
    """Calculate loan constant (annual debt service / loan amount)."""
    annual_debt_service = monthly_payment(loan_amount, annual_rate_pct, term_years) * 12
    return annual_debt_service / loan_amount if loan_amount > 0 else 0.0
