from clubsync.normalize import fold_name, normalize_name, normalize_title, slugify


def test_normalize_name():
    assert normalize_name("Noah Telson") == "noah telson"
    assert normalize_name("  Noah   Telson  ") == "noah telson"
    assert normalize_name("Simone O'Donovan") == "simone odonovan"
    assert normalize_name("DJ 2000") == "dj"


def test_normalize_name_drops_accents():
    assert normalize_name("María") == "mara"
    assert normalize_name("Antonia Bär") == "antonia br"


def test_normalize_name_keeps_hyphens():
    assert normalize_name("Johnson-Williams") == "johnson-williams"
    assert normalize_name("Johnson-Williams") != normalize_name("Johnson Williams")


def test_fold_name():
    assert fold_name("María García") == "maria garcia"
    assert fold_name("Marie-Laure Gagné") == "marie-laure gagne"


def test_normalize_title():
    assert normalize_title("House Show: Special!") == "house show special"
    assert normalize_title("  Improv   Jam ") == "improv jam"
    assert normalize_title("5 Minute Musicals") == "5 minute musicals"


def test_slugify():
    assert slugify("Brace! Brace!") == "brace-brace"
    assert slugify("Noah Telson") == "noah-telson"
