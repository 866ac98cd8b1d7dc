"""
List API Controller

Flask route handlers exposing one ListController to a web UI. Handlers read
the Flask request, drive the list controller and return JSON-ready dicts
with an HTTP status code.
"""

import logging
from typing import Any, Dict, List, Tuple

from flask import request

from controllers.list_controller import ListController
from models.search_criterion import SearchCriterion
from services.errors import ListControllerError

logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]


def serialize_entity(entity: Any) -> Any:
    """Turn an entity into something jsonify accepts."""
    if hasattr(entity, 'to_dict'):
        return entity.to_dict()
    if isinstance(entity, dict):
        return entity
    return {key: value for key, value in vars(entity).items() if not key.startswith('_')}


class ListApiController:
    """Controller that provides Flask route handlers for a ListController."""

    def __init__(self, list_controller: ListController):
        self.list_controller = list_controller
        self._navigation = {
            'next': list_controller.next,
            'previous': list_controller.previous,
            'next-pages': list_controller.next_pages,
            'previous-pages': list_controller.previous_pages,
        }

    def get_state(self) -> Dict[str, Any]:
        """
        GET /api/list

        Returns the current page and paging state.
        """
        lc = self.list_controller
        return {
            'items': [serialize_entity(entity) for entity in lc.current_list],
            'current_page': lc.current_page,
            'total_page': lc.total_page,
            'total': lc.total,
            'visible_pages': lc.visible_pages,
            'first_visible_page': lc.first_visible_page,
            'last_visible_page': lc.last_visible_page,
            'is_filtered': lc.is_filtered,
        }

    def load_records(self) -> Response:
        """PUT /api/list with a JSON array of records; replaces the list."""
        records = request.get_json(silent=True)
        if not isinstance(records, list):
            logger.error("List upload rejected: body is not a JSON array")
            return {'error': 'Request body must be a JSON array of records'}, 400

        self.list_controller.list = records
        logger.info(f"Loaded {len(records)} records")
        return self.get_state(), 200

    def change_page(self, page: int) -> Response:
        """GET /api/list/page/<page>"""
        self.list_controller.on_change_page(page)
        return self.get_state(), 200

    def navigate(self, action: str) -> Response:
        """POST /api/list/<action> for next, previous, next-pages, previous-pages."""
        handler = self._navigation.get(action)
        if handler is None:
            return {'error': f"Unknown navigation action: {action}"}, 404

        handler()
        return self.get_state(), 200

    def search(self) -> Response:
        """
        POST /api/list/search

        Body: {"criteria": [{"name": "...", "value": ...}], "identical": true}
        """
        data = request.get_json(silent=True) or {}
        raw_criteria = data.get('criteria', [])
        identical = data.get('identical', True)

        if not isinstance(raw_criteria, list):
            return {'error': "'criteria' must be a list"}, 400

        try:
            criteria: List[SearchCriterion] = [SearchCriterion.from_dict(item) for item in raw_criteria]
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Invalid search criteria: {e}")
            return {'error': f"Invalid search criteria: {e}"}, 400

        try:
            if identical:
                self.list_controller.on_filter(criteria)
            else:
                self.list_controller.search(criteria, identical_search=False)
        except ListControllerError as e:
            logger.error(f"Search failed: {e}")
            return {'error': str(e)}, 400

        return self.get_state(), 200

    def remove_item(self, position: int) -> Response:
        """DELETE /api/list/items/<position> removes an entity of the current page."""
        current = self.list_controller.current_list
        if position < 0 or position >= len(current):
            return {'error': f"No item at position {position}"}, 404

        if not self.list_controller.remove(current[position]):
            return {'error': f"Item at position {position} is not in the list"}, 404

        return self.get_state(), 200

    def clean(self) -> Response:
        """POST /api/list/clean"""
        self.list_controller.clean()
        return self.get_state(), 200
