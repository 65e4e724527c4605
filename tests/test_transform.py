import pytest

from list_transformation.errors import TransformationConfigError
from list_transformation.transform import (
    Command,
    CommaSeparatedToLines,
    OrderAndCleanList,
    RemoveDuplicates,
    TextTransformation,
    ToCommaSeparated,
    ToQuotedCommaSeparated,
    ToSqlLike,
    create_transformation,
    sanitize_line,
)

FRUITS = "banana\napple\norange"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("'apple'", "apple"),
        ('""apple""', "apple"),
        ("  'apple'  ", "'apple'"),
        ("'  apple  '", "apple"),
        ("it's", "it's"),
        ("", ""),
        ("'\"'", ""),
        ("\ufeffapple\ufeff", "apple"),
    ],
)
def test_sanitize_line(line, expected):
    assert sanitize_line(line) == expected


def test_order_and_clean_list():
    assert OrderAndCleanList().transform("banana\napple\n\norange") == "apple\nbanana\norange"


def test_order_and_clean_list_descending():
    assert OrderAndCleanList(order="DESC").transform(FRUITS) == "orange\nbanana\napple"
    assert OrderAndCleanList().transform(FRUITS, order="DESC") == "orange\nbanana\napple"


def test_order_and_clean_list_sanitizes_and_drops_blank_lines():
    text = "  'pear'  \r\n\t\n\"fig\"\r\n   \nApple"
    assert OrderAndCleanList().transform(text) == "'pear'\nApple\nfig"


def test_order_and_clean_list_is_ordinal():
    # Uppercase sorts before lowercase by code point.
    assert OrderAndCleanList().transform("b\nB\na\nA") == "A\nB\na\nb"


def test_order_and_clean_list_blank_input():
    assert OrderAndCleanList().transform("\n   \n\r\n") == ""


def test_order_and_clean_list_drops_bom_only_lines():
    assert OrderAndCleanList().transform("b\n\ufeff\na") == "a\nb"


def test_order_and_clean_list_desc_reverses_asc():
    text = "kiwi\nmango\n'lime'\n\nfig"
    asc = OrderAndCleanList().transform(text).split("\n")
    desc = OrderAndCleanList(order="DESC").transform(text).split("\n")
    assert desc == list(reversed(asc))


def test_remove_duplicates():
    text = "apple\norange\nbanana\napple\nbanana\ngrape"
    assert RemoveDuplicates().transform(text) == "apple\norange\nbanana\ngrape"


def test_remove_duplicates_compares_raw_lines():
    text = "apple\n apple\napple \n\n\napple"
    assert RemoveDuplicates().transform(text) == "apple\n apple\napple \n"


def test_remove_duplicates_is_idempotent():
    text = "b\na\r\nb\n\nc\na\n"
    once = RemoveDuplicates().transform(text)
    assert RemoveDuplicates().transform(once) == once


def test_remove_duplicates_keeps_lone_carriage_return():
    text = "a\r\r\nb\na\r"
    once = RemoveDuplicates().transform(text)
    assert once == "a\r\r\nb"
    assert RemoveDuplicates().transform(once) == once


def test_to_comma_separated():
    assert ToCommaSeparated().transform(FRUITS) == "banana, apple, orange"


def test_to_comma_separated_strips_trailing_commas_and_quotes():
    text = "'banana',\n\"apple\",  \r\norange"
    assert ToCommaSeparated().transform(text) == "banana, apple, orange"


def test_to_comma_separated_keeps_whitespace_only_lines():
    assert ToCommaSeparated().transform("a\n\nb\n   \nc") == "a, b, , c"


def test_to_quoted_comma_separated():
    assert ToQuotedCommaSeparated().transform(FRUITS) == "'banana', 'apple', 'orange'"


def test_to_quoted_comma_separated_does_not_escape():
    assert ToQuotedCommaSeparated().transform("o'neil\nx") == "'o'neil', 'x'"


def test_comma_separated_to_lines():
    assert CommaSeparatedToLines().transform("banana, apple, orange") == FRUITS


def test_comma_separated_to_lines_quoted_items():
    text = "'banana', \"apple pie\" , orange"
    assert CommaSeparatedToLines().transform(text) == "'banana'\n\"apple pie\"\norange"


def test_comma_separated_to_lines_passes_through_line_separated_input():
    text = "banana,\napple pie,\r\norange"
    assert CommaSeparatedToLines().transform(text) == text


def test_comma_separated_to_lines_drops_tokens_not_followed_by_comma():
    assert CommaSeparatedToLines().transform("a b, c") == "b\nc"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("'x, y', z", "'x, y'\nz"),
        ('"a, b", c', '"a, b"\nc'),
    ],
)
def test_comma_separated_to_lines_quoted_span_with_comma(text, expected):
    assert CommaSeparatedToLines().transform(text) == expected


def test_comma_separated_to_lines_no_items():
    assert CommaSeparatedToLines().transform("") == ""
    assert CommaSeparatedToLines().transform(", ,") == ""


def test_comma_join_and_split_round_trip():
    joined = ToCommaSeparated().transform("'banana'\napple,\norange")
    assert CommaSeparatedToLines().transform(joined) == FRUITS


def test_to_sql_like():
    transformation = ToSqlLike("fruit", "mysql", "OR")
    expected = "`fruit` LIKE '%banana%' OR\n`fruit` LIKE '%apple%' OR\n`fruit` LIKE '%orange%'"
    assert transformation.transform(FRUITS) == expected


@pytest.mark.parametrize(
    "dialect, quoted",
    [("mysql", "`name`"), ("sqlserver", "[name]"), ("other", '"name"')],
)
def test_to_sql_like_quotes_column_per_dialect(dialect, quoted):
    assert ToSqlLike("name", dialect).transform("x") == f"{quoted} LIKE '%x%'"


def test_to_sql_like_escapes_and_cleans_values():
    transformation = ToSqlLike("name", "sqlserver", "AND")
    text = "'o'neil',\nsmith\n\n"
    assert transformation.transform(text) == "[name] LIKE '%o''neil%' AND\n[name] LIKE '%smith%'"


def test_to_sql_like_counts_clauses_and_conjunctions():
    result = ToSqlLike("c", conjunction="AND").transform("a\nb\n\nc\nd")
    assert result.count(" LIKE ") == 4
    assert result.count(" AND\n") == 3
    assert not result.endswith("AND")


def test_to_sql_like_defaults():
    transformation = ToSqlLike("c")
    assert (transformation.dialect, transformation.conjunction) == ("mysql", "OR")


def test_to_sql_like_unsupported_dialect():
    with pytest.raises(TransformationConfigError, match="Unsupported database type: oracle"):
        ToSqlLike("c", "oracle").transform("a")


def test_to_sql_like_unsupported_dialect_without_items():
    # Quoting only happens per clause.
    assert ToSqlLike("c", "oracle").transform("") == ""


def test_base_transformation_is_not_implemented():
    with pytest.raises(NotImplementedError):
        TextTransformation().transform("a")


def test_transformations_are_immutable():
    transformation = ToSqlLike("c")
    with pytest.raises(AttributeError):
        transformation.column = "d"


def test_create_transformation():
    assert create_transformation("orderAndCleanList", order="DESC") == OrderAndCleanList("DESC")
    assert create_transformation(Command.REMOVE_DUPLICATES_ON_LIST, order="DESC") == RemoveDuplicates()
    assert create_transformation(
        Command.LIST_TO_SQL_LIKE, column="c", dialect=None, conjunction="AND"
    ) == ToSqlLike("c", "mysql", "AND")


def test_create_transformation_unsupported_order():
    with pytest.raises(TransformationConfigError, match="Unsupported sort order: desc"):
        create_transformation("orderAndCleanList", order="desc")


def test_create_transformation_unknown_command():
    with pytest.raises(ValueError):
        create_transformation("reverseList")


def test_command_titles():
    assert [command.value for command in Command] == [
        "orderAndCleanList",
        "toCommaSeparated",
        "toQuotedCommaSeparated",
        "fromCommaSeparatedToLines",
        "listToSqlLike",
        "removeDuplicatesOnList",
    ]
    assert Command.REMOVE_DUPLICATES_ON_LIST.title == "LIST: Remove Duplicates"
