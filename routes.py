from flask import jsonify


def init_routes(app, list_api_controller):
    """Initialize the list API routes"""

    @app.route("/api/list", methods=["GET"])
    def api_list():
        return jsonify(list_api_controller.get_state())

    @app.route("/api/list", methods=["PUT"])
    def api_list_load():
        body, status = list_api_controller.load_records()
        return jsonify(body), status

    @app.route("/api/list/page/<int:page>", methods=["GET"])
    def api_list_page(page):
        body, status = list_api_controller.change_page(page)
        return jsonify(body), status

    @app.route("/api/list/search", methods=["POST"])
    def api_list_search():
        body, status = list_api_controller.search()
        return jsonify(body), status

    @app.route("/api/list/clean", methods=["POST"])
    def api_list_clean():
        body, status = list_api_controller.clean()
        return jsonify(body), status

    @app.route("/api/list/items/<int:position>", methods=["DELETE"])
    def api_list_remove(position):
        body, status = list_api_controller.remove_item(position)
        return jsonify(body), status

    @app.route("/api/list/<action>", methods=["POST"])
    def api_list_navigate(action):
        """next, previous, next-pages, previous-pages"""
        body, status = list_api_controller.navigate(action)
        return jsonify(body), status
