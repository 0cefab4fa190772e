# app.py
# Flask REST API around the course catalog and the schedule generator.

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from catalog import CatalogProvider
from config import Settings, load_settings
from grouping import group_equivalent_schedules
from schedule_finder import empty_courses, find_unresolvable_pairs, generate_schedules
from schemas import ScheduleRequest

logger = logging.getLogger(__name__)


def _validation_details(exc: ValidationError):
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def create_app(settings: Settings = None, catalog: CatalogProvider = None) -> Flask:
    settings = settings or load_settings()
    catalog = catalog or CatalogProvider(settings.courses_json_path, settings.catalog_ttl_seconds)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["CATALOG"] = catalog
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    @app.get("/health")
    def health():
        return jsonify({
            "success": True,
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.env,
        })

    @app.get("/api/courses")
    def api_courses():
        # Returns the normalized catalog, optionally narrowed by term, subject or openness.
        sections = catalog.snapshot().filter(
            term=request.args.get("term"),
            subject=request.args.get("subject"),
            open_only=request.args.get("openOnly") == "true",
        )
        return jsonify({"success": True, "totalCount": len(sections), "data": [s.to_dict() for s in sections]})

    @app.get("/api/courses/search")
    def api_search():
        query = (request.args.get("q") or "").strip()
        if len(query) < 2:
            return jsonify({"success": False, "error": 'Query parameter "q" must be at least 2 characters'}), 400

        results = []
        for code, sections in catalog.snapshot().search(query).items():
            first = sections[0]
            results.append({
                "subjectCourse": code,
                "courseTitle": first.title,
                "subject": first.subject,
                "courseNumber": first.course_number,
                "creditHours": first.credit_hours,
                "sectionCount": len(sections),
                "openSections": sum(1 for s in sections if s.open_section),
                "sections": [s.to_dict() for s in sections[:5]],
            })
        return jsonify({"success": True, "totalCount": len(results), "data": results})

    @app.get("/api/courses/subjects/list")
    def api_subjects():
        subjects = catalog.snapshot().subjects()
        return jsonify({"success": True, "totalCount": len(subjects), "data": subjects})

    @app.get("/api/courses/<code>")
    def api_course(code):
        sections = catalog.snapshot().sections_for(code)
        if not sections:
            return jsonify({"success": False, "error": f"Course {code.upper()} not found"}), 404
        return jsonify({"success": True, "totalCount": len(sections), "data": [s.to_dict() for s in sections]})

    @app.post("/api/schedules/generate")
    def api_generate():
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400
        body.setdefault("maxResults", settings.max_results)
        req = ScheduleRequest.model_validate(body)
        if len(req.courses) > settings.max_courses:
            return jsonify({
                "success": False,
                "error": f"Too many courses: maximum {settings.max_courses} courses allowed",
            }), 400

        snapshot = catalog.snapshot()
        course_sections = {}
        for code in req.courses:
            sections = snapshot.sections_for(code)
            if not sections:
                return jsonify({"success": False, "error": f"Course {code} not found or has no sections"}), 404
            course_sections[code] = sections

        result = generate_schedules(course_sections, req.filters, req.max_results)
        payload = {"success": True, **result.to_dict()}
        payload["groupedSchedules"] = [g.to_dict() for g in group_equivalent_schedules(result.schedules)]

        if not result.schedules:
            # Explain the empty result: filtered-out courses, then pairs that can never coexist.
            payload["unsatisfiableCourses"] = empty_courses(course_sections, req.filters)
            payload["unresolvablePairs"] = find_unresolvable_pairs(course_sections, req.filters)
        return jsonify(payload)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return jsonify({"success": False, "error": "Invalid request", "details": _validation_details(exc)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"success": False, "error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        logger.exception("Unhandled error while serving %s", request.path)
        body = {"success": False, "error": "Internal Server Error"}
        if settings.is_development:
            body["details"] = str(exc)
        return jsonify(body), 500

    return app


if __name__ == "__main__":
    # Load configuration and start the development server.
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app(settings).run(port=settings.port, debug=settings.is_development)
