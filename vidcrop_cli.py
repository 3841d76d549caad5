#!/usr/bin/env python3

import argparse
import sys
import yaml
from vidcroplib.core.job import CropJob
from vidcroplib.core.request import RequestLoader

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="Crop, trim and rescale a video")
	parser.add_argument('-y', '--yaml', dest='yamlfile', required=True,
		help='request yaml file describing the crop to do')
	parser.add_argument('-o', '--output', dest='output_file',
		help='override output file from yaml')
	parser.add_argument('-r', '--resource-dir', dest='resource_dir',
		help='bundled resource directory searched for bin/ffmpeg')
	parser.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help='print the ffmpeg command, do not run it')
	parser.add_argument('-p', '--dump-plan', dest='dump_plan', action='store_true',
		help='print the normalized request and ffmpeg argv as yaml')
	args = parser.parse_args()
	return args

#============================================

def main():
	args = parse_args()
	try:
		request = RequestLoader(args.yamlfile,
			output_override=args.output_file).load()
		job = CropJob(request, resource_dir=args.resource_dir)
		if args.dump_plan:
			command = job.build()
			plan = {
				'request': request.to_dict(),
				'ffmpeg': command.binary,
				'argv': list(command.args),
			}
			print(yaml.safe_dump(plan, sort_keys=False))
			return
		if args.dry_run:
			print(job.build().display())
			return
		job.run()
	except RuntimeError as exc:
		print(f"error: {exc}", file=sys.stderr)
		sys.exit(1)


if __name__ == '__main__':
	main()
