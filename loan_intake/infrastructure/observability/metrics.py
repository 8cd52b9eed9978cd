"""Prometheus metrics for intake volume, loan sizes, and error rates"""

from prometheus_client import Counter, Histogram

from loan_intake.domain.models import LoanApplication

customers_created_counter = Counter(
    "loan_intake_customers_created_total",
    "Total customers registered",
)

loan_applications_counter = Counter(
    "loan_intake_loan_applications_total",
    "Total loan applications created",
    ["term_bucket"],  # <=12m | 13-60m | 61-180m | >180m
)

loan_principal_histogram = Histogram(
    "loan_intake_principal_amount",
    "Requested principal per loan application",
    buckets=[1_000, 5_000, 10_000, 25_000, 50_000, 100_000, 250_000, 500_000, 1_000_000],
)

monthly_payment_histogram = Histogram(
    "loan_intake_monthly_payment_amount",
    "Computed monthly payment per loan application",
    buckets=[50, 100, 250, 500, 1_000, 2_500, 5_000, 10_000],
)

errors_counter = Counter(
    "loan_intake_errors_total",
    "Failed requests by error kind",
    ["kind"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def term_bucket(term_months: int) -> str:
    if term_months <= 12:
        return "<=12m"
    elif term_months <= 60:
        return "13-60m"
    elif term_months <= 180:
        return "61-180m"
    return ">180m"


def record_loan_application(loan_application: LoanApplication) -> None:
    """Record loan size and payment distribution"""
    loan_applications_counter.labels(term_bucket=term_bucket(loan_application.term_months)).inc()
    loan_principal_histogram.observe(float(loan_application.amount.amount))
    monthly_payment_histogram.observe(float(loan_application.monthly_payment.amount))


def record_customer_created() -> None:
    customers_created_counter.inc()


def record_error(kind: str) -> None:
    errors_counter.labels(kind=kind).inc()
