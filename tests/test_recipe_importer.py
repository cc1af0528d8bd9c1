from unittest.mock import Mock, patch

import pytest
import requests

from mealspace.recipe_importer import RecipeImportError, RecipeImporter


def _response(status_code=200, json_data=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


SCRAPED = {
    "title": "Lemon Cake",
    "description": "Zesty.",
    "servings": 8,
    "prepTime": 20,
    "cookTime": 45,
    "tags": ["dessert"],
    "image": "https://example.com/cake.jpg",
    "ingredients": [
        {"name": "flour", "amount": 2, "unit": "cups"},
        {"name": "lemons", "amount": 2},
        {"name": "salt"},
        {"amount": 1},
    ],
    "instructions": [{"instruction": "Mix"}, {"instruction": "  "}, {"instruction": "Bake"}],
}


@pytest.fixture
def importer():
    return RecipeImporter(base_url="https://functions.example.com/v1/", api_key="anon-key", timeout=5)


class TestConfiguration:
    def test_requires_base_url(self, monkeypatch):
        monkeypatch.setattr("mealspace.config.RECIPE_FUNCTIONS_URL", None)
        with pytest.raises(RecipeImportError, match="not configured"):
            RecipeImporter()

    def test_reads_config(self, monkeypatch):
        monkeypatch.setattr("mealspace.config.RECIPE_FUNCTIONS_URL", "https://fn.example.com")
        monkeypatch.setattr("mealspace.config.RECIPE_FUNCTIONS_KEY", "k")
        importer = RecipeImporter()
        assert importer.base_url == "https://fn.example.com"
        assert importer.api_key == "k"


class TestImportFromUrl:
    @patch("mealspace.recipe_importer.requests.post")
    def test_success(self, mock_post, importer):
        mock_post.return_value = _response(json_data=SCRAPED)

        recipe = importer.import_from_url("https://example.com/lemon-cake")

        mock_post.assert_called_once_with(
            "https://functions.example.com/v1/scrape-recipe",
            headers={"Authorization": "Bearer anon-key"},
            timeout=5,
            json={"url": "https://example.com/lemon-cake"},
        )
        assert recipe.title == "Lemon Cake"
        assert recipe.servings == 8
        assert recipe.prep_time == 20
        assert recipe.cook_time == 45
        assert recipe.source_url == "https://example.com/lemon-cake"
        assert [(i.name, i.quantity, i.unit) for i in recipe.ingredients] == [
            ("flour", 2.0, "cups"),
            ("lemons", 2.0, None),
            ("salt", None, None),
        ]
        assert recipe.instructions == ["Mix", "Bake"]

    @patch("mealspace.recipe_importer.requests.post")
    def test_defaults_for_sparse_response(self, mock_post, importer):
        mock_post.return_value = _response(json_data={"ingredients": [{"name": "water"}]})

        recipe = importer.import_from_url("https://example.com/x")

        assert recipe.title == "Untitled Recipe"
        assert recipe.servings == 4

    @patch("mealspace.recipe_importer.requests.post")
    def test_service_error_message(self, mock_post, importer):
        mock_post.return_value = _response(status_code=400, json_data={"error": "No recipe found on page"})

        with pytest.raises(RecipeImportError, match="No recipe found on page"):
            importer.import_from_url("https://example.com/x")

    @patch("mealspace.recipe_importer.requests.post")
    def test_service_error_without_json(self, mock_post, importer):
        mock_post.return_value = _response(status_code=503, json_error=True)

        with pytest.raises(RecipeImportError, match="Server error: 503"):
            importer.import_from_url("https://example.com/x")

    @patch("mealspace.recipe_importer.requests.post")
    def test_network_error(self, mock_post, importer):
        mock_post.side_effect = requests.ConnectionError("boom")

        with pytest.raises(RecipeImportError, match="Failed to reach recipe service"):
            importer.import_from_url("https://example.com/x")

    @patch("mealspace.recipe_importer.requests.post")
    def test_error_in_successful_response(self, mock_post, importer):
        mock_post.return_value = _response(json_data={"error": "Could not extract recipe from image"})

        with pytest.raises(RecipeImportError, match="Could not extract"):
            importer.import_from_url("https://example.com/x")


class TestImportFromImage:
    @patch("mealspace.recipe_importer.requests.post")
    def test_posts_multipart_image(self, mock_post, importer):
        mock_post.return_value = _response(json_data=SCRAPED)

        recipe = importer.import_from_image(b"\x89PNG...", "card.png", "image/png")

        args, kwargs = mock_post.call_args
        assert args == ("https://functions.example.com/v1/ocr-recipe",)
        assert kwargs["files"] == {"image": ("card.png", b"\x89PNG...", "image/png")}
        assert recipe.title == "Lemon Cake"
        assert recipe.source_url is None

    def test_no_auth_header_without_key(self):
        importer = RecipeImporter(base_url="https://fn.example.com", api_key="")
        assert importer._headers() == {}
