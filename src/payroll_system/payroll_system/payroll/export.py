from __future__ import annotations

import io
from typing import Mapping, Sequence

import pandas as pd

from ..employees.model import Employee
from .model import PayrollRecord

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

REGISTER_COLUMNS = [
    "Employee Code",
    "Employee Name",
    "Period Start",
    "Period End",
    "Total Days",
    "Present Days",
    "Paid Leave Days",
    "Unpaid Leave Days",
    "Absent Days",
    "Payable Days",
    "Basic Salary",
    "Allowances",
    "Deductions",
    "Net Salary",
    "Payment Status",
    "Payment Date",
]


def build_payroll_register(records: Sequence[PayrollRecord], employees: Mapping[int, Employee]) -> io.BytesIO:
    """Payroll register as an in-memory .xlsx workbook."""
    data = []
    for p in records:
        emp = employees.get(p.employee_id)
        data.append(
            {
                "Employee Code": emp.employee_code if emp else "N/A",
                "Employee Name": emp.full_name if emp else "Unknown",
                "Period Start": p.pay_period_start,
                "Period End": p.pay_period_end,
                "Total Days": p.total_days,
                "Present Days": p.present_days,
                "Paid Leave Days": p.paid_leave_days,
                "Unpaid Leave Days": p.unpaid_leave_days,
                "Absent Days": p.absent_days,
                "Payable Days": p.payable_days,
                "Basic Salary": float(p.basic_salary),
                "Allowances": float(p.total_allowances),
                "Deductions": float(p.total_deductions),
                "Net Salary": float(p.net_salary),
                "Payment Status": p.payment_status.value,
                "Payment Date": p.payment_date.strftime("%Y-%m-%d") if p.payment_date else "",
            }
        )

    df = pd.DataFrame(data, columns=REGISTER_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Payroll")

    output.seek(0)
    return output
