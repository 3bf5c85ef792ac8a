"""
Flask application for generate-and-print plus printer/job inspection.
"""
from dataclasses import asdict

from flask import Flask, Response, jsonify, request

from generation.generator_base import GenerationError
from generation.imagen_generator import ImagenGenerator
from printing import directory, jobs, printer_state
from printing.cups_printer import CupsPrinter
from printing.printer_base import PrinterError, PrintOptions
from printing.resume_watcher import PrinterResumeWatcher
from settings import Settings


def create_app(printer=None, generator=None, settings: Settings | None = None):
    if settings is None:
        settings = Settings.from_env()

    app = Flask(__name__)
    app.config["OUTPUT_DIR"] = settings.output_dir

    if printer is None:
        printer = CupsPrinter(printer_name=settings.printer_name)
    if generator is None:
        generator = ImagenGenerator(
            api_key=settings.gemini_api_key,
            model=settings.imagen_model,
            output_dir=settings.output_dir,
        )

    app.printer = printer
    app.generator = generator

    app.resume_watcher = None
    if settings.watch_printers:
        app.resume_watcher = PrinterResumeWatcher(
            interval=settings.watch_interval,
            on_resume=lambda name: app.logger.info("Resumed printer %s", name),
            on_error=lambda e: app.logger.warning("Printer watch failed: %s", e),
        ).start()

    def _error(message: str, status: int):
        return jsonify({"ok": False, "error": message}), status

    @app.route("/api/generate", methods=["POST"])
    def generate():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _error("request body must be a JSON object", 400)
        prompt = str(data.get("prompt") or "").strip()
        if not prompt:
            return _error("prompt is required", 400)

        try:
            image = app.generator.generate(prompt, save=True)
            submission = app.printer.print_image(image.data, PrintOptions(fit_to_page=True))
        except (GenerationError, PrinterError) as e:
            app.logger.error("Generate and print failed: %s", e)
            return _error(str(e), 502)

        response = Response(image.data, mimetype="image/png")
        response.headers["X-Printer"] = submission.printer_name
        response.headers["X-Print-Job-Id"] = submission.job_id
        return response

    @app.route("/printers", methods=["GET"])
    def printers():
        try:
            return jsonify([asdict(p) for p in directory.get_all_printers()])
        except PrinterError as e:
            return _error(str(e), 502)

    @app.route("/printers/<name>/resume", methods=["POST"])
    def resume_printer(name: str):
        try:
            result = printer_state.check_and_resume_printer(name, auto_enable=True)
        except PrinterError as e:
            return _error(str(e), 502)
        return jsonify({"ok": True, **asdict(result)})

    @app.route("/jobs", methods=["GET"])
    @app.route("/jobs/<job_id>", methods=["GET"])
    def job_status(job_id: str | None = None):
        try:
            return Response(jobs.get_print_job_status(job_id), mimetype="text/plain")
        except PrinterError as e:
            return _error(str(e), 502)

    @app.route("/jobs/<job_id>", methods=["DELETE"])
    def cancel_job(job_id: str):
        try:
            jobs.cancel_print_job(job_id)
        except PrinterError as e:
            return _error(str(e), 502)
        return jsonify({"ok": True})

    return app
