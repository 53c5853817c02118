#!/usr/bin/env python3
"""
sharemount Status API Server

A small read-only REST API reporting which declared Windows shares are
mounted and whether their symbolic links are in place. Mounting is not
offered here, it needs the interactive password prompt of
mount-windows-shares.
"""

import sys
import logging
import argparse
from flask import Flask, jsonify

from .configdb import ConfigDB
from .handlers import MountsHandler
from .logsetup import setup_logging
from ._version import __version__

logger = logging.getLogger(__name__)


class StatusAPIServer:
    """REST API server for sharemount status"""

    def __init__(self, host='127.0.0.1', port=1083, debug=False, configdb=None):
        """
        Initialize the API server

        Args:
            host: Host to bind to (default: 127.0.0.1)
            port: Port to listen on (default: 1083)
            debug: Enable debug mode
            configdb: ConfigDB to read from (default: the user's configuration database)
        """
        self.host = host
        self.port = port
        self.debug = debug
        self.app = Flask(__name__)
        self.configdb = configdb or ConfigDB()
        self.mounts_handler = MountsHandler(self.configdb)

        if not debug:
            self.app.logger.setLevel(logging.WARNING)

        self._register_routes()

    def _register_routes(self):
        """Register all API routes"""

        @self.app.route('/version', methods=['GET'])
        @self.app.route('/api/v1/version', methods=['GET'])
        def get_version():
            """Get version information"""
            return jsonify({
                'service': 'sharemount-status-api',
                'version': __version__,
                'api_version': 'v1',
                'description': 'GVFS Windows share mount status',
                'endpoints': {
                    'version': '/api/v1/version',
                    'mounts': '/api/v1/mounts',
                    'mounts_discovered': '/api/v1/mounts/discovered'
                }
            })

        @self.app.route('/api/v1/mounts', methods=['GET'])
        def list_mounts():
            """List declared mounts with mount and link state"""
            return self.mounts_handler.handle_list_mounts()

        @self.app.route('/api/v1/mounts/discovered', methods=['GET'])
        def list_discovered_mounts():
            """List SMB shares currently mounted by GVFS"""
            return self.mounts_handler.handle_list_discovered()

    def run(self):
        """Start the API server"""
        logger.info(f"Starting sharemount status server on {self.host}:{self.port}")
        self.app.run(host=self.host, port=self.port, debug=self.debug)


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='sharemount status server')

    parser.add_argument('--host', default='127.0.0.1',
                        help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=1083,
                        help='Port to listen on (default: 1083)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging')

    return parser.parse_args(argv)


def main(argv=None):
    """Main function"""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    server = StatusAPIServer(host=args.host, port=args.port, debug=args.debug)
    try:
        server.run()
    except OSError as e:
        logger.error(f"Failed to start server: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
