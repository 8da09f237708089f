from tsebo.extraction.skills import extract_skills, fragment_skills
from tsebo.vocabulary import Vocabulary


def test_vocabulary_terms_with_symbols():
    skills = extract_skills("I know c# and .net plus node.js", {})
    assert {"c#", ".net", "node.js"} <= skills


def test_terms_match_whole_words_only():
    skills = extract_skills("Worked on PostgreSQL clusters", {})
    assert "postgresql" in skills
    assert "sql" not in skills
    assert "postgres" not in skills


def test_skills_section_fragments():
    sections = {"skills": "Python, Flask; Kubernetes\n• Team leadership"}
    skills = extract_skills("", sections)
    assert {"python", "flask", "kubernetes", "team leadership"} <= skills


def test_fragments_only_come_from_skills_section():
    skills = extract_skills("Team leadership\nPython", {})
    assert "python" in skills
    assert "team leadership" not in skills


def test_category_prefixes_and_long_fragments():
    found = fragment_skills("Languages: Go\nA very long sentence about many things at once")
    assert "go" not in found  # too short
    found = fragment_skills("Databases: Redis\nFrameworks: Spring Boot")
    assert {"redis", "spring boot"} <= found
    assert not any(len(s.split()) > 3 for s in found)


def test_stop_words_removed_and_lowercase():
    skills = extract_skills("", {"skills": "Skills, Experience, PYTHON"})
    assert "skills" not in skills
    assert "experience" not in skills
    assert all(s == s.lower() for s in skills)


def test_injected_vocabulary():
    vocab = Vocabulary(skills=("cobol",))
    skills = extract_skills("Maintained COBOL batch jobs and python scripts", {}, vocab)
    assert skills == {"cobol"}
