import json

import pytest

from bathlance.cli import cli


@pytest.fixture
def products_file(tmp_path):
    records = [
        {
            'id': 'brush',
            'name': 'Mint Toothbrush',
            'category': 'toothbrush',
            'registrationDate': '2023-10-10T00:00:00.000Z',
            'expiryDate': '2024-01-10T00:00:00.000Z',
            'stock': 1,
        },
        {
            'id': 'towel',
            'name': 'Bath Towel',
            'category': 'towel',
            'registrationDate': '2024-01-01T00:00:00.000Z',
            'expiryDate': '2024-07-01T00:00:00.000Z',
            'stock': 0,
        },
    ]
    path = tmp_path / 'products.json'
    path.write_text(json.dumps(records), encoding='utf-8')
    return path


def test_expiry_command(runner):
    result = runner.invoke(cli, ['expiry', '--registered', '2024-01-01', '--months', '12',
                                 '--manufactured', '2023-06-01', '--shelf-life', '6'])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '2023-12-01T00:00:00.000Z'


def test_expiry_command_uses_category_default(runner):
    result = runner.invoke(cli, ['expiry', '--registered', '2024-01-01', '--category', 'toothbrush'])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '2024-04-01T00:00:00.000Z'


def test_expiry_command_rejects_bad_registration(runner):
    result = runner.invoke(cli, ['expiry', '--registered', 'last week', '--months', '3'])
    assert result.exit_code != 0
    assert 'Invalid' in result.output


def test_remind_as_json(runner, products_file):
    result = runner.invoke(cli, ['remind', str(products_file), '--now', '2024-01-08T09:00:00Z', '--as-json'])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload['reminders'] == [
        {'productId': 'brush', 'productName': 'Mint Toothbrush', 'daysRemaining': 2},
    ]
    assert payload['shoppingList'] == [{'productId': 'towel', 'productName': 'Bath Towel'}]


def test_remind_skips_items_on_shopping_list(runner, products_file):
    result = runner.invoke(cli, ['remind', str(products_file), '--now', '2024-01-08T09:00:00Z',
                                 '--shopping-list', 'towel', '--days', '1', '--as-json'])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {'reminders': [], 'shoppingList': []}


def test_remind_text_output(runner, products_file):
    result = runner.invoke(cli, ['remind', str(products_file), '--now', '2024-01-08T09:00:00Z'])
    assert result.exit_code == 0, result.output
    assert 'Mint Toothbrush' in result.output
    assert 'replace by 2024-01-10' in result.output
    assert 'search.shopping.naver.com' in result.output
    assert 'Bath Towel' in result.output


def test_remind_rejects_negative_lead_time(runner, products_file):
    result = runner.invoke(cli, ['remind', str(products_file), '--days', '-1'])
    assert result.exit_code != 0


def test_replace_command(runner, products_file):
    result = runner.invoke(cli, ['replace', str(products_file), 'brush', '--now', '2024-01-08T09:00:00Z'])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload['product']['stock'] == 0
    assert payload['product']['registrationDate'] == '2024-01-08T09:00:00.000Z'
    assert payload['product']['expiryDate'] == '2024-04-08T09:00:00.000Z'
    assert payload['shoppingListIntent'] == {'productId': 'brush', 'productName': 'Mint Toothbrush'}


def test_replace_without_stock_fails(runner, products_file):
    result = runner.invoke(cli, ['replace', str(products_file), 'towel'])
    assert result.exit_code != 0
    assert 'No stock remaining' in result.output


def test_replace_unknown_product(runner, products_file):
    result = runner.invoke(cli, ['replace', str(products_file), 'missing'])
    assert result.exit_code != 0
    assert 'missing' in result.output


def test_invalid_json_file(runner, tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{not json', encoding='utf-8')
    result = runner.invoke(cli, ['remind', str(path)])
    assert result.exit_code != 0
    assert 'not valid JSON' in result.output


def test_expiry_command_reports_out_of_range_period(runner):
    result = runner.invoke(cli, ['expiry', '--registered', '2024-01-01', '--months', '200000'])
    assert result.exit_code == 1
    assert 'out of range' in result.output


def test_remind_reports_out_of_range_period(runner, tmp_path):
    path = tmp_path / 'products.json'
    path.write_text(json.dumps([{
        'id': 'odd',
        'name': 'Forever Towel',
        'registrationDate': '2024-01-01T00:00:00.000Z',
        'periodAfterOpening': 10 ** 7,
    }]), encoding='utf-8')
    result = runner.invoke(cli, ['remind', str(path), '--now', '2024-01-08T09:00:00Z'])
    assert result.exit_code == 1
    assert 'out of range' in result.output
