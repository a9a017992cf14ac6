"""Flask JSON control API for the catpoint security system."""

import threading
from datetime import datetime
from typing import Optional, Dict, Any

from flask import Flask, jsonify, request

from ..models.sensor import Sensor, SensorType
from ..models.status import AlarmStatus, ArmingStatus
from ..services.interfaces import StatusListener
from ..services.security_service import SecurityService
from ..services.error_handler import global_error_handler, ErrorSeverity
from ..utils import format_timestamp, load_image
from ..logging_config import get_logger

logger = get_logger("web_app")

COMPONENT_NAME = "web_app"


class StatusBoard(StatusListener):
    """Listener that keeps the latest events for the status endpoint."""

    def __init__(self):
        self._lock = threading.Lock()
        self.last_alarm_status: Optional[AlarmStatus] = None
        self.last_cat_detected: Optional[bool] = None
        self.sensor_change_count = 0
        self.last_updated: Optional[datetime] = None

    def notify(self, status: AlarmStatus) -> None:
        with self._lock:
            self.last_alarm_status = status
            self.last_updated = datetime.now()

    def cat_detected(self, cat_detected: bool) -> None:
        with self._lock:
            self.last_cat_detected = cat_detected
            self.last_updated = datetime.now()

    def sensor_status_changed(self) -> None:
        with self._lock:
            self.sensor_change_count += 1
            self.last_updated = datetime.now()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'last_alarm_event': self.last_alarm_status.value if self.last_alarm_status else None,
                'last_cat_event': self.last_cat_detected,
                'sensor_change_count': self.sensor_change_count,
                'last_updated': format_timestamp(self.last_updated) if self.last_updated else None
            }


class SecurityWebApp:
    """Flask web application exposing the security service."""

    def __init__(self, security_service: SecurityService, max_image_size_mb: int = 16):
        """Initialize web application."""
        self.app = Flask(__name__)
        self.security_service = security_service
        self.status_board = StatusBoard()
        # Requests run on several threads; service calls must not interleave
        self._service_lock = threading.Lock()
        self.security_service.add_status_listener(self.status_board)

        self.app.config['MAX_CONTENT_LENGTH'] = max_image_size_mb * 1024 * 1024

        global_error_handler.register_component(COMPONENT_NAME)
        self._setup_routes()

        logger.info("Catpoint web application initialized")

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.errorhandler(413)
        def request_too_large(error):
            max_mb = self.app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
            return jsonify({
                'success': False,
                'error': f"Upload exceeds the {max_mb} MB limit"
            }), 413

        @self.app.route('/api/status')
        def api_status():
            """Get system status."""
            try:
                with self._service_lock:
                    data = self._status_data()
                return jsonify({
                    'success': True,
                    'data': data
                })
            except Exception as e:
                return self._server_error("getting status", e)

        @self.app.route('/api/arming', methods=['POST'])
        def api_set_arming():
            """Change the arming status."""
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return self._bad_request('Request body must be a JSON object')

            try:
                arming_status = ArmingStatus(data.get('status'))
            except ValueError:
                return self._bad_request(
                    f"status must be one of {[s.value for s in ArmingStatus]}"
                )

            try:
                with self._service_lock:
                    self.security_service.set_arming_status(arming_status)
                    status = self._status_data()
                return jsonify({
                    'success': True,
                    'message': f"Arming status set to {arming_status.value}",
                    'data': status
                })
            except Exception as e:
                return self._server_error("setting arming status", e)

        @self.app.route('/api/sensors', methods=['GET'])
        def api_get_sensors():
            """List sensors."""
            try:
                with self._service_lock:
                    sensors = sorted(self.security_service.get_sensors())
                return jsonify({
                    'success': True,
                    'data': [sensor.to_dict() for sensor in sensors]
                })
            except Exception as e:
                return self._server_error("listing sensors", e)

        @self.app.route('/api/sensors', methods=['POST'])
        def api_add_sensor():
            """Add a sensor."""
            data = request.get_json(silent=True)
            if not data:
                return self._bad_request('No data provided')
            if not isinstance(data, dict):
                return self._bad_request('Request body must be a JSON object')

            name = str(data.get('name') or '').strip()
            if not name:
                return self._bad_request('name is required')

            try:
                sensor_type = SensorType(data.get('sensor_type'))
            except ValueError:
                return self._bad_request(
                    f"sensor_type must be one of {[t.value for t in SensorType]}"
                )

            try:
                sensor = Sensor(name=name, sensor_type=sensor_type)
                with self._service_lock:
                    self.security_service.add_sensor(sensor)
                return jsonify({
                    'success': True,
                    'data': sensor.to_dict()
                }), 201
            except Exception as e:
                return self._server_error("adding sensor", e)

        @self.app.route('/api/sensors/<sensor_id>', methods=['DELETE'])
        def api_remove_sensor(sensor_id):
            """Remove a sensor."""
            try:
                with self._service_lock:
                    sensor = self._find_sensor(sensor_id)
                    if sensor is None:
                        return self._not_found(sensor_id)
                    self.security_service.remove_sensor(sensor)

                return jsonify({
                    'success': True,
                    'message': f"Sensor {sensor.name} removed"
                })
            except Exception as e:
                return self._server_error("removing sensor", e)

        @self.app.route('/api/sensors/<sensor_id>/activation', methods=['POST'])
        def api_sensor_activation(sensor_id):
            """Activate or deactivate a sensor."""
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return self._bad_request('Request body must be a JSON object')

            active = data.get('active')
            if not isinstance(active, bool):
                return self._bad_request('active must be true or false')

            try:
                with self._service_lock:
                    sensor = self._find_sensor(sensor_id)
                    if sensor is None:
                        return self._not_found(sensor_id)

                    self.security_service.change_sensor_activation_status(sensor, active)
                    alarm_status = self.security_service.get_alarm_status()

                return jsonify({
                    'success': True,
                    'data': {
                        'sensor': sensor.to_dict(),
                        'alarm_status': alarm_status.value
                    }
                })
            except Exception as e:
                return self._server_error("changing sensor activation", e)

        @self.app.route('/api/image', methods=['POST'])
        def api_process_image():
            """Submit a camera image for cat detection."""
            upload = request.files.get('image')
            if upload is None:
                return self._bad_request('image file is required')

            try:
                image = load_image(upload.read())
            except ValueError as e:
                return self._bad_request(str(e))

            try:
                with self._service_lock:
                    self.security_service.process_image(image)
                    cat_detected = self.security_service.is_cat_detected()
                    alarm_status = self.security_service.get_alarm_status()

                return jsonify({
                    'success': True,
                    'data': {
                        'cat_detected': cat_detected,
                        'alarm_status': alarm_status.value
                    }
                })
            except Exception as e:
                return self._server_error("processing image", e)

    def _status_data(self) -> Dict[str, Any]:
        alarm_status = self.security_service.get_alarm_status()
        arming_status = self.security_service.get_arming_status()
        return {
            'alarm_status': alarm_status.value,
            'alarm_description': alarm_status.description,
            'arming_status': arming_status.value,
            'arming_description': arming_status.description,
            'armed': arming_status.is_armed(),
            'cat_detected': self.security_service.is_cat_detected(),
            'sensors': [s.to_dict() for s in sorted(self.security_service.get_sensors())],
            'events': self.status_board.snapshot()
        }

    def _find_sensor(self, sensor_id: str) -> Optional[Sensor]:
        for sensor in self.security_service.get_sensors():
            if sensor.sensor_id == sensor_id:
                return sensor
        return None

    def _bad_request(self, message: str):
        return jsonify({
            'success': False,
            'error': message
        }), 400

    def _not_found(self, sensor_id: str):
        return jsonify({
            'success': False,
            'error': f"Sensor not found: {sensor_id}"
        }), 404

    def _server_error(self, action: str, error: Exception):
        logger.error(f"Error {action}: {error}")
        if not global_error_handler.is_recorded(error):
            global_error_handler.handle_error(COMPONENT_NAME, error, ErrorSeverity.HIGH)
        return jsonify({
            'success': False,
            'error': str(error)
        }), 500

    def run(self, host='0.0.0.0', port=5000, debug=False):
        """Run the Flask application."""
        logger.info(f"Starting catpoint web interface on {host}:{port}")
        self.app.run(host=host, port=port, debug=debug, threaded=True)

    def get_app(self) -> Flask:
        """Get the Flask app instance for external WSGI servers."""
        return self.app


def create_app(security_service: SecurityService, max_image_size_mb: int = 16) -> Flask:
    """Factory function to create Flask app."""
    web_app = SecurityWebApp(security_service, max_image_size_mb)
    return web_app.get_app()
