"""Example: Synchronous TCP echo server and client."""

import socket
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tcpclient import TcpClient


def run_server():
    """Run an echo server that serves one client at a time."""
    with socket.create_server(("127.0.0.1", 8888)) as server:
        print("Server listening on 127.0.0.1:8888")
        try:
            while True:
                conn, address = server.accept()
                with conn:
                    while True:
                        data = conn.recv(4096)
                        if not data:
                            break
                        print(f"Received from {address}: {data.decode()}")
                        conn.sendall(data)
        except KeyboardInterrupt:
            print("\nShutting down server...")


def run_client():
    """Run the echo client."""
    with TcpClient() as client:
        client.connect("localhost", 8888)
        message = "Hello, Server!"
        print(f"Sending: {message}")
        client.send(message)
        response = client.receive()
        print(f"Received: {response.decode()}")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "client":
        run_client()
    else:
        run_server()
