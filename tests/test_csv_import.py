from bracketeer.importing import ImportIssue, parse_player_csv
from bracketeer.models.player import PlayerFactory


def test_semicolon_file_with_header():
    content = (
        "Nom;Age;Classement;Email\n"
        '"Ana Duval";34;15/1;ana@example.com\n'
        "Ben Okafor; 27 ;NC;\n"
    )
    result = parse_player_csv(content)

    assert result.ok
    assert [(r.line, r.name, r.age, r.ranking, r.email) for r in result.rows] == [
        (2, "Ana Duval", 34, "15/1", "ana@example.com"),
        (3, "Ben Okafor", 27, "NC", None),
    ]


def test_comma_file_without_header():
    result = parse_player_csv("Ana Duval,34\nBen Okafor\n")
    assert [r.name for r in result.rows] == ["Ana Duval", "Ben Okafor"]
    assert result.rows[0].line == 1


def test_blank_lines_keep_physical_line_numbers():
    result = parse_player_csv("Player\n\nAna Duval\n   \nX\n")

    assert [r.line for r in result.rows] == [3]
    assert result.errors == [ImportIssue(line=5, message="Name must be at least 2 characters")]
    assert str(result.errors[0]) == "Line 5: Name must be at least 2 characters"


def test_duplicates_are_rejected():
    existing = PlayerFactory().create_roster(["Chloe Martin"])
    content = "Ana Duval\nana duval\nCHLOE MARTIN\n"

    result = parse_player_csv(content, existing_players=existing)

    assert [r.name for r in result.rows] == ["Ana Duval"]
    assert [str(e) for e in result.errors] == [
        'Line 2: "ana duval" already exists',
        'Line 3: "CHLOE MARTIN" already exists',
    ]


def test_missing_or_invalid_name():
    result = parse_player_csv("name;age\n;30\nBad<Name>;20\n")

    assert result.rows == []
    assert [(e.line, e.message) for e in result.errors] == [
        (2, "Name is required"),
        (3, "Name contains invalid characters"),
    ]
    assert not result.ok


def test_invalid_optional_fields_are_dropped():
    result = parse_player_csv("Ana Duval;abc;;not-an-email\nBen Okafor;250\n")

    assert result.ok
    assert (result.rows[0].age, result.rows[0].email) == (None, None)
    assert result.rows[1].age is None


def test_empty_file():
    for content in ("", "\n  \n"):
        result = parse_player_csv(content)
        assert result.rows == []
        assert result.errors == [ImportIssue(line=0, message="Empty file")]
        assert str(result.errors[0]) == "Empty file"


def test_rows_become_seeded_players():
    result = parse_player_csv("Ana Duval;34;15/1\nBen Okafor\n")
    players = result.to_players(first_seed=5)

    assert [(p.name, p.seed) for p in players] == [("Ana Duval", 5), ("Ben Okafor", 6)]
    assert players[0].age == 34
    assert players[0].ranking == "15/1"
    assert all(p.id.startswith("player_") for p in players)
    assert len({p.id for p in players}) == 2
