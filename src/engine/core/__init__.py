"""
どこで: `engine.core` サブパッケージ。
何を: 数値プリミティブ（Vector2/Color3/平滑化）・フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: 描画パイプラインの基盤を構成し、上位層（render/api）から再利用可能にするため。
"""
