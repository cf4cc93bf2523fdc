"""
どこで: `engine.monitor` サブパッケージ。
何を: 表示用メトリクス（FPS カウンタ）を提供。
なぜ: 描画経路から計測を分離し、タイトル表示などの周辺機能に限定して使うため。
"""
