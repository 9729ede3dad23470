from setuptools import setup


setup(
	name="treebot",
	version="0.1.0",
	description="Program a robot to walk, clean and plant across a tree-shaped level.",
	python_requires=">=3.10",
	py_modules=[
		"config",
		"level",
		"main",
		"navigator",
		"program",
		"scene",
		"soundfx",
		"world",
	],
	install_requires=[
		"panda3d",
	],
	extras_require={
		"test": ["pytest"],
	},
	data_files=[
		("share/treebot/levels", ["levels/demo.json"]),
	],
	entry_points={
		"console_scripts": [
			"treebot=main:main",
		],
	},
	options={
		"build_apps": {
			"gui_apps": {
				"treebot": "main.py",
			},
			"log_filename": "$USER_APPDATA/TreeBot/output.log",
			"log_append": False,
			"include_patterns": [
				"levels/**",
				"models/**",
				"soundfx/**",
			],
			"exclude_patterns": [
				"**/__pycache__/**",
				"**/*.pyc",
				"**/*.pyo",
				"tests/**",
			],
			"plugins": [
				"pandagl",
				"p3openal_audio",
			],
			"platforms": [
				"manylinux2014_x86_64",
				"macosx_10_9_x86_64",
				"win_amd64",
			],
		}
	}
)
