"""
Tests for the JSON API.
"""

import pytest


class TestApiAuth:

    @pytest.mark.parametrize('path', ['/api/dashboard', '/api/recipes', '/api/fridge', '/api/shopping', '/api/profile'])
    def test_requires_login(self, client, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.get_json()['success'] is False

    def test_unknown_api_path_is_json(self, logged_in_client):
        response = logged_in_client.get('/api/nothing-here')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Not found'}


class TestDashboardApi:

    def test_dashboard(self, logged_in_client):
        data = logged_in_client.get('/api/dashboard').get_json()
        assert data['expiring_soon_count'] == 1
        assert data['suggestion']['title'] == 'Basque Cheesecake'


class TestRecipesApi:

    def test_all(self, logged_in_client):
        data = logged_in_client.get('/api/recipes').get_json()
        assert data['count'] == 2
        assert data['filters'] == {'query': '', 'category': 'All'}

    def test_filtered(self, logged_in_client):
        data = logged_in_client.get('/api/recipes?category=Dessert&query=BASQUE').get_json()
        assert [r['id'] for r in data['recipes']] == ['r-cheesecake']

    def test_detail(self, logged_in_client):
        data = logged_in_client.get('/api/recipes/r-chicken').get_json()
        assert data['recipe']['ingredients'][1] == {
            'id': data['recipe']['ingredients'][1]['id'],
            'name': 'Parsley',
            'amount': None,
        }
        assert data['recipe']['last_cooked'] is None

    def test_detail_unknown(self, logged_in_client):
        response = logged_in_client.get('/api/recipes/missing')
        assert response.status_code == 404
        assert 'missing' in response.get_json()['error']


class TestFridgeApi:

    def test_list_has_status(self, logged_in_client):
        items = logged_in_client.get('/api/fridge').get_json()['items']
        assert [i['status'] for i in items] == ['expiring_soon', 'expired', 'fresh']

    def test_add(self, logged_in_client):
        response = logged_in_client.post('/api/fridge', json={
            'name': 'Yogurt', 'quantity': '2', 'expiry': '2026-10-20',
        })
        assert response.status_code == 201
        assert response.get_json()['item']['expiry'] == '2026-10-20'

        data = logged_in_client.get('/api/dashboard').get_json()
        assert data['expiring_soon_count'] == 2

    def test_add_invalid(self, logged_in_client):
        response = logged_in_client.post('/api/fridge', json={'name': 'Yogurt'})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_delete(self, logged_in_client, state):
        assert logged_in_client.delete('/api/fridge/0').status_code == 200
        assert [i.name for i in state.fridge_items] == ['Milk', 'Eggs']

    def test_delete_out_of_range(self, logged_in_client):
        assert logged_in_client.delete('/api/fridge/3').status_code == 404


class TestShoppingApi:

    def test_list(self, logged_in_client):
        items = logged_in_client.get('/api/shopping').get_json()['items']
        assert [i['name'] for i in items] == ['Heavy Cream', 'Vanilla Extract', 'Parsley']

    def test_add(self, logged_in_client):
        response = logged_in_client.post('/api/shopping', json={'name': 'Butter'})
        assert response.status_code == 201
        item = response.get_json()['item']
        assert item['quantity'] == '1'
        assert item['is_checked'] is False

    def test_toggle(self, logged_in_client):
        data = logged_in_client.post('/api/shopping/s-cream/toggle').get_json()
        assert data['item']['is_checked'] is True

        data = logged_in_client.post('/api/shopping/s-cream/toggle').get_json()
        assert data['item']['is_checked'] is False

    def test_toggle_unknown(self, logged_in_client):
        assert logged_in_client.post('/api/shopping/missing/toggle').status_code == 404

    def test_remove_checked(self, logged_in_client):
        logged_in_client.post('/api/shopping/s-cream/toggle')
        logged_in_client.post('/api/shopping/s-parsley/toggle')
        data = logged_in_client.post('/api/shopping/remove-checked').get_json()
        assert [i['id'] for i in data['items']] == ['s-vanilla']

    def test_delete_offsets(self, logged_in_client, state):
        response = logged_in_client.post('/api/shopping/delete', json={'offsets': [0, 2]})
        assert response.status_code == 200
        assert [i.id for i in state.shopping_items] == ['s-vanilla']

    def test_delete_bad_body(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/delete', json={'offsets': 'all'})
        assert response.status_code == 400

    def test_delete_out_of_range(self, logged_in_client, state):
        response = logged_in_client.post('/api/shopping/delete', json={'offsets': [1, 5]})
        assert response.status_code == 404
        assert len(state.shopping_items) == 3

    def test_generate(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/generate', json={'recipe_ids': ['r-chicken']})
        assert [i['name'] for i in response.get_json()['added']] == ['Chicken Thighs']

    def test_generate_requires_selection(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/generate', json={'recipe_ids': []})
        assert response.status_code == 400

    def test_generate_unknown_recipe(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/generate', json={'recipe_ids': ['missing']})
        assert response.status_code == 404


class TestProfileApi:

    def test_get(self, logged_in_client):
        profile = logged_in_client.get('/api/profile').get_json()['profile']
        assert profile == {'vegetarian': False, 'allergies': '', 'units': 'Metric', 'version': '0.1 (Sketch)'}

    def test_update(self, logged_in_client):
        response = logged_in_client.post('/api/profile', json={'vegetarian': True, 'units': 'US Customary'})
        profile = response.get_json()['profile']
        assert profile['vegetarian'] is True
        assert profile['units'] == 'US Customary'

    def test_update_invalid(self, logged_in_client):
        response = logged_in_client.post('/api/profile', json={'units': 'Imperial'})
        assert response.status_code == 400


class TestApiErrorContract:
    """Every failure is answered with a JSON error body."""

    @pytest.mark.parametrize('path', ['/api/fridge', '/api/shopping', '/api/profile',
                                      '/api/shopping/delete', '/api/shopping/generate'])
    @pytest.mark.parametrize('body', [['Yogurt', '2'], 'Yogurt', 7])
    def test_non_object_body_rejected(self, logged_in_client, path, body):
        response = logged_in_client.post(path, json=body)
        assert response.status_code == 400
        assert response.get_json() == {
            'success': False,
            'error': 'Request body must be a JSON object',
        }

    def test_non_object_body_changes_nothing(self, logged_in_client, state):
        logged_in_client.post('/api/fridge', json=['Yogurt', '2'])
        logged_in_client.post('/api/shopping', json=['Butter'])
        assert len(state.fridge_items) == 3
        assert len(state.shopping_items) == 3

    def test_unexpected_error_returns_json_500(self, logged_in_client, state, monkeypatch, caplog):
        def broken():
            raise RuntimeError('clock stopped')

        monkeypatch.setattr(state, 'fridge_overview', broken)

        response = logged_in_client.get('/api/fridge')

        assert response.status_code == 500
        assert response.get_json() == {'success': False, 'error': 'clock stopped'}
        assert 'Error in fridge API' in caplog.text

    def test_unexpected_error_in_dashboard(self, logged_in_client, state, monkeypatch):
        def broken():
            raise RuntimeError('no suggestion')

        monkeypatch.setattr(state, 'suggested_recipe', broken)

        response = logged_in_client.get('/api/dashboard')
        assert response.status_code == 500
        assert response.get_json()['success'] is False


class TestShoppingApiValidation:

    @pytest.mark.parametrize('offsets', [[True], [False], [0, True], [1.0], ['1']])
    def test_delete_rejects_non_integer_offsets(self, logged_in_client, state, offsets):
        """JSON booleans are not positions even though bool subclasses int."""
        response = logged_in_client.post('/api/shopping/delete', json={'offsets': offsets})
        assert response.status_code == 400
        assert [i.id for i in state.shopping_items] == ['s-cream', 's-vanilla', 's-parsley']

    def test_generate_with_unknown_recipe_adds_nothing(self, logged_in_client, state):
        """All ids are resolved before the list changes."""
        response = logged_in_client.post('/api/shopping/generate', json={
            'recipe_ids': ['r-chicken', 'missing'],
        })
        assert response.status_code == 404
        assert 'missing' in response.get_json()['error']
        assert [i.name for i in state.shopping_items] == ['Heavy Cream', 'Vanilla Extract', 'Parsley']

    def test_generate_rejects_non_list(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/generate', json={'recipe_ids': 'r-chicken'})
        assert response.status_code == 400

    def test_generate_multiple_recipes(self, logged_in_client):
        response = logged_in_client.post('/api/shopping/generate', json={
            'recipe_ids': ['r-cheesecake', 'r-chicken'],
        })
        added = [i['name'] for i in response.get_json()['added']]
        assert added == ['Cream Cheese', 'Sugar', 'Chicken Thighs']


class TestFridgeApiDefaults:

    def test_add_without_expiry_uses_state_clock(self, logged_in_client):
        response = logged_in_client.post('/api/fridge', json={'name': 'Butter', 'quantity': '1'})
        assert response.status_code == 201
        assert response.get_json()['item']['expiry'] == '2026-10-24'
