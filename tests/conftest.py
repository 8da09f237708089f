import pytest

SAMPLE_CV = """Thabo Mokoena
Email: Thabo.Mokoena@example.com
Phone: 082 123 4567
Address: 12 Long Street, Cape Town
Nationality: South African
Gender: Male
Date of Birth: 15/03/1992

Profile
Full stack developer with seven years of experience building web platforms for retail and banking clients.

Technical Skills
Python, Django, React, PostgreSQL, Docker

Work Experience
Senior Software Engineer
Takealot Group
Mar 2019 - Present
• Led the checkout team and migrated services to Kubernetes
Junior Developer
Acme Solutions
2016 - 2019
• Maintained internal reporting dashboards

Education
BSc Computer Science
University of Cape Town, Rondebosch
2015

Certifications
AWS Certified Developer - Amazon Web Services (2021)

Projects
Budget tracker: https://github.com/thabo/budget

References
Dr Thandi Mbeki
Acme Solutions
thandi@acme.co.za
"""

SHORT_CV = "John Smith\nEmail: john@x.com\nSkills\nReact, Python\nExperience\nSoftware Developer\nAcme Corp\n2019 - 2022"


@pytest.fixture
def sample_cv():
    return SAMPLE_CV


@pytest.fixture
def short_cv():
    return SHORT_CV
