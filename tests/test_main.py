import pytest

import main
from main import DEFAULT_BASKET, DEFAULT_CARD_NUMBER, parse_args, parse_item


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["CHECK_PRODUCTS_PATH", "CHECK_DISCOUNT_CARDS_PATH", "CHECK_RESULT_PATH", "CHECK_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


def test_parse_item():
    assert parse_item("3-2") == (3, 2)
    assert parse_item("3--2") == (3, -2)
    with pytest.raises(ValueError):
        parse_item("3")
    with pytest.raises(ValueError):
        parse_item("a-b")


def test_parse_args_sums_repeated_products():
    requested, card, paths = parse_args(["1-2", "2-1", "1-3", "discountCard=4444", "--output", "x.json"])
    assert requested == {1: 5, 2: 1}
    assert list(requested) == [1, 2]
    assert card == 4444
    assert paths == {"result_path": "x.json"}


def test_parse_args_without_card():
    requested, card, _ = parse_args(["1-1"])
    assert requested == {1: 1}
    assert card is None


def test_parse_args_default_basket():
    requested, card, _ = parse_args([])
    assert requested == DEFAULT_BASKET
    assert card == DEFAULT_CARD_NUMBER


@pytest.mark.parametrize("argv", [["discountCard=abc", "1-1"], ["1-1", "--products"]])
def test_parse_args_errors(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_main_writes_receipt(data_files, tmp_path, capsys):
    products, cards = data_files
    output = tmp_path / "receipt.csv"

    main.main(["1-5", "2-1", "discountCard=9999", "--products", str(products), "--cards", str(cards), "--output", str(output)])

    content = output.read_text(encoding="utf-8")
    assert "DISCOUNT CARD;9999" in content
    assert "DISCOUNT PERCENTAGE;2.00%" in content
    # 5 x 10.00 mayorista (5.00) + 3.33 con 2% (0.07)
    assert "TOTAL PRICE;53.33" in content
    assert "TOTAL DISCOUNT;5.07" in content
    assert "TOTAL WITH DISCOUNT;48.26" in content
    assert "TOTAL WITH DISCOUNT: 48.26" in capsys.readouterr().out


@pytest.mark.parametrize("item", ["99-1", "1-0"])
def test_main_exits_on_bad_basket(data_files, tmp_path, item):
    products, cards = data_files
    output = tmp_path / "receipt.csv"

    with pytest.raises(SystemExit) as excinfo:
        main.main([item, "--products", str(products), "--cards", str(cards), "--output", str(output)])
    assert excinfo.value.code == 1
    assert not output.exists()


def test_main_exits_on_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["1-1", "--products", str(tmp_path / "missing.csv")])
    assert excinfo.value.code == 1
