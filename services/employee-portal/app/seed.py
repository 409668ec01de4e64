"""
Demo employees loaded into the in-memory store when EMPLOYEE_STORE=memory
"""
from typing import List

from app.models import EmployeeFormData
from app.store import InMemoryEmployeeStore

DEMO_EMPLOYEES = [
    {
        "name": "Alice Johnson",
        "email": "alice.johnson@example.com",
        "department": "Engineering",
        "position": "Senior Software Engineer",
        "phone": "+1-555-0101",
        "salary": 145000,
        "hireDate": "2019-03-11"
    },
    {
        "name": "Bob Smith",
        "email": "bob.smith@example.com",
        "department": "Engineering",
        "position": "DevOps Engineer",
        "phone": "+1-555-0102",
        "salary": 128000,
        "hireDate": "2020-07-01"
    },
    {
        "name": "Carol Davis",
        "email": "carol.davis@example.com",
        "department": "Marketing",
        "position": "Marketing Manager",
        "phone": "+1-555-0103",
        "salary": 112000,
        "hireDate": "2018-11-19"
    },
    {
        "name": "David Wilson",
        "email": "david.wilson@example.com",
        "department": "Sales",
        "position": "Sales Representative",
        "phone": "+1-555-0104",
        "salary": 68000,
        "hireDate": "2022-02-14"
    },
    {
        "name": "Eva Brown",
        "email": "eva.brown@example.com",
        "department": "HR",
        "position": "HR Manager",
        "phone": "+1-555-0105",
        "salary": 98000,
        "hireDate": "2017-05-08"
    },
    {
        "name": "Frank Miller",
        "email": "frank.miller@example.com",
        "department": "Finance",
        "position": "Financial Analyst",
        "phone": "+1-555-0106",
        "salary": 87000,
        "hireDate": "2021-09-27"
    },
    {
        "name": "Grace Lee",
        "email": "grace.lee@example.com",
        "department": "Engineering",
        "position": "Frontend Developer",
        "phone": "+1-555-0107",
        "salary": 118000,
        "hireDate": "2021-01-04"
    },
    {
        "name": "Henry Taylor",
        "email": "henry.taylor@example.com",
        "department": "Sales",
        "position": "Sales Manager",
        "phone": "+1-555-0108",
        "salary": 104000,
        "hireDate": "2016-10-03"
    },
    {
        "name": "Ivy Chen",
        "email": "ivy.chen@example.com",
        "department": "Engineering",
        "position": "Data Engineer",
        "phone": "+1-555-0109",
        "salary": 132000,
        "hireDate": "2023-04-17"
    },
    {
        "name": "Jack Anderson",
        "email": "jack.anderson@example.com",
        "department": "Finance",
        "position": "Accountant",
        "phone": "+1-555-0110",
        "salary": 76000,
        "hireDate": "2019-08-12"
    },
    {
        "name": "Kate Rodriguez",
        "email": "kate.rodriguez@example.com",
        "department": "Marketing",
        "position": "Content Marketing Specialist",
        "phone": "+1-555-0111",
        "salary": 71000,
        "hireDate": "2022-06-06"
    },
    {
        "name": "Liam Thompson",
        "email": "liam.thompson@example.com",
        "department": "HR",
        "position": "Recruiter",
        "phone": "+1-555-0112",
        "salary": 64000,
        "hireDate": "2023-01-09"
    },
]


def demo_employees() -> List[EmployeeFormData]:
    return [EmployeeFormData.model_validate(data) for data in DEMO_EMPLOYEES]


def seeded_store() -> InMemoryEmployeeStore:
    """In-memory store pre-filled with the demo employees."""
    return InMemoryEmployeeStore(demo_employees())
