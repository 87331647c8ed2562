#!/usr/bin/env python3
"""
AI Codebase Analyzer Server

Simple Flask server exposing git change extraction over HTTP.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from flask import Flask, request, jsonify
from flask_cors import CORS

from ai_codebase_analyzer.api import CodebaseAnalyzerAPI, ChangesRequest
from ai_codebase_analyzer.errors import AnalyzerError, ErrorCode


STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(analyzer_api: CodebaseAnalyzerAPI = None) -> Flask:
    """Create the Flask application."""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for agent frontends

    analyzer_api = analyzer_api or CodebaseAnalyzerAPI()

    @app.errorhandler(AnalyzerError)
    def handle_analyzer_error(error: AnalyzerError):
        response = error.to_dict()
        response['status'] = 'failed'
        return jsonify(response), STATUS_BY_CODE.get(error.code, 500)

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify(analyzer_api.health())

    @app.route('/api/v1/changes/extract', methods=['POST'])
    def extract_changes():
        """Extract git changes for a project."""
        data = request.get_json(silent=True) or {}

        if 'project_path' not in data:
            return jsonify({
                'code': ErrorCode.INVALID_INPUT.value,
                'message': "'project_path' is required",
                'status': 'failed'
            }), 400

        changes_request = ChangesRequest(
            project_path=data['project_path'],
            revision=data.get('revision'),
            count=data.get('count'),
            ignore_patterns=data.get('ignore_patterns', []),
        )
        result = analyzer_api.extract_changes(changes_request)

        response = result.to_dict()
        if data.get('format') == 'markdown':
            response['markdown'] = result.markdown
        return jsonify(response)

    return app


if __name__ == '__main__':
    analyzer_api = CodebaseAnalyzerAPI()
    server = analyzer_api.config.server

    print("🚀 Starting AI Codebase Analyzer Server...")
    print(f"📍 Server will be available at: http://localhost:{server.port}")
    print("📋 API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Extract Changes: POST /api/v1/changes/extract")

    create_app(analyzer_api).run(
        host=server.host,
        port=server.port,
        debug=analyzer_api.config.debug
    )
