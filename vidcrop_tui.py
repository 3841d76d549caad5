#!/usr/bin/env python3

"""
Textual TUI wrapper for a single vidcrop request.
"""

# Standard Library
import argparse
import os
import shlex
import sys
import threading
import time
import traceback

script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
	sys.path.insert(0, script_dir)

# PIP3 modules
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import RichLog, Static
from rich.text import Text

# local repo modules
from vidcroplib.core import utils
from vidcroplib.core.errors import CropError
from vidcroplib.core.job import CropJob
from vidcroplib.core.request import RequestLoader

#============================================

NORD_COLORS = {
	'foreground': "#D8DEE9",
	'dim': "#4C566A",
	'header': "#88C0D0",
	'command': "#ECEFF4",
	'flags': "#81A1C1",
	'numbers': "#B48EAD",
	'paths': "#A3BE8C",
	'strings': "#EBCB8B",
	'error': "#BF616A",
}

# applied in order, later patterns restyle earlier matches
COMMAND_STYLES = (
	(r"(?<![\w\\])-[A-Za-z][A-Za-z0-9_:]*", 'flags'),
	(r"\b(?:libx264|libvpx-vp9|mpeg4|aac|libopus|mp3|yuv420p)\b", 'strings'),
	(r"\b\d+(?:\.\d+)?\b", 'numbers'),
	(r"(?:^|(?<=\s))'?/[^\s']+'?", 'paths'),
)

STATUS_COLORS = {
	'encoding': 'foreground',
	'done': 'paths',
	'failed': 'error',
}

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="vidcrop TUI wrapper")
	parser.add_argument('-y', '--yaml', dest='yamlfile', required=True,
		help='request yaml file describing the crop to do')
	parser.add_argument('-o', '--output', dest='output_file',
		help='override output file from yaml')
	parser.add_argument('-r', '--resource-dir', dest='resource_dir',
		help='bundled resource directory searched for bin/ffmpeg')
	parser.add_argument('-d', '--debug', dest='debug_log', action='store_true',
		help='write debug log to vidcrop_tui.log in the current directory')
	args = parser.parse_args()
	return args

#============================================

def format_elapsed(seconds: float) -> str:
	if seconds < 60:
		return f"{seconds:.1f}s"
	(minutes, secs) = divmod(seconds, 60)
	(hours, minutes) = divmod(int(minutes), 60)
	if hours == 0:
		return f"{minutes}m {secs:04.1f}s"
	return f"{hours}h {minutes:02d}m {secs:04.1f}s"

#============================================

def summarize_command(command: str) -> str:
	"""
	Short "tool: output-name" label for an ffmpeg command line.
	"""
	try:
		parts = shlex.split(command or "")
	except ValueError:
		return command
	if len(parts) == 0:
		return "command"
	tool = os.path.basename(parts[0])
	if len(parts) == 1:
		return tool
	return f"{tool}: {os.path.basename(parts[-1])}"

#============================================

def highlight_command(command: str) -> Text:
	text = Text(command or "", style=f"bold {NORD_COLORS['command']}")
	for pattern, color in COMMAND_STYLES:
		text.highlight_regex(pattern, style=NORD_COLORS[color])
	return text

#============================================

def _field(text: Text, label: str, value: str, color: str,
	newline: bool = True) -> None:
	text.append(f"{label}: ", style=NORD_COLORS['dim'])
	text.append(value, style=NORD_COLORS[color])
	if newline:
		text.append("\n")

#============================================

class VidcropTuiApp(App):
	BINDINGS = [
		("q", "quit", "Quit"),
	]

	CSS = """
	#panels {
		height: 9;
	}

	#status_panel {
		width: 2fr;
		border: round #4C566A;
	}

	#request_panel {
		width: 3fr;
		border: round #4C566A;
	}

	.panel_title {
		color: #88C0D0;
		text-style: bold;
	}

	#log {
		height: 1fr;
		border: round #4C566A;
	}
	"""

	def __init__(self, yaml_file: str, output_override: str = None,
		resource_dir: str = None, debug_log: bool = False):
		super().__init__()
		self.yaml_file = yaml_file
		self.output_override = output_override
		self.resource_dir = resource_dir
		self.request = None
		self.encoder_path = None
		self.current_summary = ""
		self.start_time = None
		self.finish_time = None
		self.encode_seconds = None
		self.error_text = None
		self.metrics_widget = None
		self.request_widget = None
		self.log_widget = None
		self.finished = False
		self.log_path = None
		self.log_lock = threading.Lock()
		if debug_log:
			self.log_path = os.path.join(os.getcwd(), "vidcrop_tui.log")
			self._write_log(f"debug log: {self.log_path}", mode="w")

	#============================
	def compose(self) -> ComposeResult:
		with Horizontal(id="panels"):
			with Vertical(id="status_panel"):
				yield Static("Status  (q quits)", classes="panel_title")
				yield Static("", id="metrics")
			with Vertical(id="request_panel"):
				yield Static("Request", classes="panel_title")
				yield Static("", id="request_info")
		yield RichLog(id="log", wrap=True, highlight=False)

	#============================
	def on_mount(self) -> None:
		self.metrics_widget = self.query_one("#metrics", Static)
		self.request_widget = self.query_one("#request_info", Static)
		self.log_widget = self.query_one(RichLog)
		self.start_time = time.time()
		self._update_request_info()
		if self.log_path is not None:
			self.log_widget.write(f"debug log: {self.log_path}")
		thread = threading.Thread(target=self._run_request, daemon=True)
		thread.start()
		self.set_interval(0.5, self._update_metrics)

	#============================
	def _run_request(self) -> None:
		utils.set_quiet_mode(True)
		utils.set_command_reporter(self._report_command)
		try:
			request = RequestLoader(self.yaml_file,
				output_override=self.output_override).load()
			job = CropJob(request, resource_dir=self.resource_dir)
			self.request = request
			self.encoder_path = job.locate_encoder()
			self.call_from_thread(self._update_request_info)
			job.run()
		except CropError as exc:
			self.call_from_thread(self._set_error, str(exc))
		except Exception as exc:
			self.call_from_thread(self._set_error, str(exc), traceback.format_exc())
		finally:
			utils.clear_command_reporter()
			utils.set_quiet_mode(False)
			self.call_from_thread(self._finish)

	#============================
	def _set_error(self, text: str, trace_text: str = None) -> None:
		self.error_text = text
		self._write_log(f"error: {text}")
		if trace_text:
			self._write_log(trace_text)
		if self.log_widget is not None:
			self.log_widget.write(
				Text(f"error: {text}", style=f"bold {NORD_COLORS['error']}")
			)

	#============================
	def _finish(self) -> None:
		if self.log_widget is None:
			return
		self.finished = True
		if self.start_time is not None and self.finish_time is None:
			self.finish_time = time.time() - self.start_time
		if self.error_text is not None:
			message = Text("finished with errors", style=NORD_COLORS['error'])
		elif self.request is None:
			message = Text("finished")
		else:
			message = Text(f"wrote {self.request.output_path}",
				style=NORD_COLORS['paths'])
		self.log_widget.write(message)
		self._write_log(message.plain)
		self._update_metrics()

	#============================
	def _report_command(self, event: dict) -> None:
		self.call_from_thread(self._handle_command_event, event)

	#============================
	def _handle_command_event(self, event: dict) -> None:
		if self.log_widget is None:
			return
		command = event.get('command', '')
		if event.get('event') == 'start':
			self.current_summary = summarize_command(command)
			self.log_widget.write(highlight_command(command))
			self._write_log(f"start: {command}")
		elif event.get('event') == 'end':
			self.encode_seconds = event.get('seconds')
			code = event.get('returncode')
			self._write_log(f"exit {code} after {self.encode_seconds:.3f}s")
			if code != 0:
				self.log_widget.write(Text(f"ffmpeg exited with status {code}",
					style=f"bold {NORD_COLORS['error']}"))
		self._update_metrics()

	#============================
	def _write_log(self, message: str, mode: str = "a") -> None:
		if self.log_path is None:
			return
		stamp = time.strftime("%H:%M:%S")
		with self.log_lock:
			with open(self.log_path, mode, encoding="utf-8") as handle:
				handle.write(f"{stamp} {message}\n")

	#============================
	def _status(self) -> str:
		if self.error_text is not None:
			return 'failed'
		if self.finished:
			return 'done'
		return 'encoding'

	#============================
	def _update_metrics(self) -> None:
		if self.metrics_widget is None or self.start_time is None:
			return
		elapsed = self.finish_time
		if elapsed is None:
			elapsed = time.time() - self.start_time
		status = self._status()
		metrics = Text()
		_field(metrics, "Status", status, STATUS_COLORS[status])
		_field(metrics, "Elapsed", format_elapsed(elapsed), 'numbers')
		if self.encode_seconds is not None:
			_field(metrics, "ffmpeg", format_elapsed(self.encode_seconds), 'numbers')
		_field(metrics, "Current", self.current_summary, 'foreground', newline=False)
		self.metrics_widget.update(metrics)

	#============================
	def _update_request_info(self) -> None:
		if self.request_widget is None:
			return
		info = Text()
		_field(info, "YAML", self.yaml_file, 'paths')
		request = self.request
		if request is None:
			info.append("loading request...", style=NORD_COLORS['dim'])
			self.request_widget.update(info)
			return
		crop = request.crop
		output = request.output
		_field(info, "Input", request.input_path, 'paths')
		_field(info, "Output", f"{request.output_path} ({output.format})", 'paths')
		_field(info, "Crop",
			f"{crop.width}x{crop.height}+{crop.x}+{crop.y} -> "
			f"{output.width}x{output.height}", 'numbers')
		trim_text = "full source"
		if request.trim is not None:
			trim_text = (f"{utils.format_timecode(request.trim.start)} - "
				f"{utils.format_timecode(request.trim.end)}")
		_field(info, "Trim", trim_text, 'numbers')
		_field(info, "Encoder", self.encoder_path or "N/A", 'paths',
			newline=self.log_path is not None)
		if self.log_path is not None:
			_field(info, "Debug log", self.log_path, 'paths', newline=False)
		self.request_widget.update(info)

#============================================

def main():
	args = parse_args()
	app = VidcropTuiApp(args.yamlfile,
		output_override=args.output_file,
		resource_dir=args.resource_dir,
		debug_log=args.debug_log)
	app.run()

#============================================

if __name__ == '__main__':
	main()
