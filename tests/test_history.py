from tsebo.extraction.history import (
    extract_certifications,
    extract_education,
    extract_employment_history,
    extract_projects,
    extract_references,
    is_date_line,
)


def test_employment_entry_with_current_role():
    section = (
        "Senior Software Engineer\n"
        "Globex Ltd\n"
        "Jan 2020 - Present\n"
        "• Built payment services in Python and Go\n"
    )
    (entry,) = extract_employment_history("", {"experience": section})
    assert entry.job_title == "Senior Software Engineer"
    assert entry.company_name == "Globex Ltd"
    assert entry.start_date == "2020-01-01"
    assert entry.end_date is None
    assert entry.responsibilities == "Built payment services in Python and Go"


def test_employment_entries_keep_document_order():
    section = "Data Analyst\nFirst Bank\n2015 - 2017\nSoftware Developer\nSecond Bank\n2017 - 2020"
    history = extract_employment_history("", {"experience": section})
    assert [e.company_name for e in history] == ["First Bank", "Second Bank"]
    assert history[1].start_date == "2017-01-01"
    assert history[1].end_date == "2020-01-01"


def test_title_without_company_or_duties_is_dropped():
    assert extract_employment_history("", {"experience": "Software Developer\n2019 - 2020"}) == []


def test_long_sentence_with_year_is_not_a_date_line():
    assert is_date_line("2019 - 2022")
    assert is_date_line("Mar 2019 - Present")
    assert not is_date_line("Delivered the 2021 migration of every billing service to the new platform")


def test_education_entry():
    section = "BSc Computer Science\nUniversity of Cape Town, Rondebosch\n2015"
    (entry,) = extract_education("", {"education": section})
    assert entry.degree == "BSc Computer Science"
    assert entry.institution == "University of Cape Town"
    assert entry.city == "Rondebosch"
    assert entry.graduation_date == "2015-01-01"


def test_education_unknown_institution():
    (entry,) = extract_education("", {"education": "Diploma in Marketing\nBoston City Campus"})
    assert entry.institution == "Unknown"
    assert entry.graduation_date is None


def test_certifications_dash_and_next_line_forms():
    section = (
        "AWS Certified Developer - Amazon Web Services (2021)\n"
        "Scrum Master\n"
        "Scrum Alliance\n"
        "2019\n"
    )
    first, second = extract_certifications("", {"certifications": section})
    assert first.title == "AWS Certified Developer"
    assert first.institution == "Amazon Web Services"
    assert first.start_date == "2021-01-01"
    assert second.title == "Scrum Master"
    assert second.institution == "Scrum Alliance"
    assert second.start_date == "2019-01-01"


def test_certifications_need_their_section():
    assert extract_certifications("AWS Certified Developer - Amazon (2021)", {}) == []


def test_projects_from_urls():
    text = "Budget tracker: https://github.com/thabo/budget.\nInventory API\nhttps://gitlab.com/thabo/inventory"
    projects = extract_projects(text, {})
    assert [(p.name, p.url) for p in projects] == [
        ("Budget tracker", "https://github.com/thabo/budget"),
        ("Inventory API", "https://gitlab.com/thabo/inventory"),
    ]


def test_references():
    section = (
        "Dr Thandi Mbeki\n"
        "Head of Engineering\n"
        "Acme Corp\n"
        "thandi@acme.co.za\n"
        "+27 82 555 1234\n"
        "Mr John Dube\n"
        "Dube Holdings\n"
        "john@dube.co.za\n"
    )
    first, second = extract_references("", {"references": section})
    assert first.name == "Dr Thandi Mbeki"
    assert first.company == "Acme Corp"
    assert first.email == "thandi@acme.co.za"
    assert first.phone == "+27 82 555 1234"
    assert second.name == "Mr John Dube"
    assert second.company == "Dube Holdings"
    assert second.phone is None


def test_references_need_their_section():
    assert extract_references("Mr John Dube\njohn@dube.co.za", {}) == []
